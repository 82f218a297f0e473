"""Random number and plotting helpers."""
