"""Normalization of package manifest license, repository and author fields."""
