"""Item registry — record store + markdown card export.

Layout:
    ./items.txt                # Data file, four lines per record
    ./cards/
    └── Wallet.md              # One card per item (YAML frontmatter)

The data file is the source of truth; cards are a one-way export.
"""
