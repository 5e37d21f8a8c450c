"""Title to filename fragment conversion."""


def slugify(title: str) -> str:
    """Lowercase a title and map spaces and underscores to hyphens.

    Nothing else is normalized: repeated or edge hyphens and non-ASCII
    characters are kept as they are.
    """
    return title.lower().replace(" ", "-").replace("_", "-")
