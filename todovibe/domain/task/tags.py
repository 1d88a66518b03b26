"""Inline ``#tag`` extraction from task titles."""

from typing import NamedTuple

TAG_PREFIX = "#"


class ExtractedTags(NamedTuple):
    """Title split into its plain words and its tags."""

    clean_title: str
    tags: tuple[str, ...]


def is_tag_token(token: str) -> bool:
    """A token is a tag if it starts with ``#`` and has a name after it."""
    return token.startswith(TAG_PREFIX) and len(token) > len(TAG_PREFIX)


def extract_tags(raw: str) -> ExtractedTags:
    """Pull ``#tag`` tokens out of a raw title.

    Tokens are whitespace-delimited. Tags keep their order of first
    appearance and duplicates are kept. The remaining words are joined
    with single spaces, so a title made only of tags yields an empty
    ``clean_title``.

    Example:
        extract_tags("Buy milk #errand #home")
        # -> ExtractedTags(clean_title="Buy milk", tags=("errand", "home"))
    """
    words: list[str] = []
    tags: list[str] = []
    for token in raw.split():
        if is_tag_token(token):
            tags.append(token[len(TAG_PREFIX) :])
        else:
            words.append(token)
    return ExtractedTags(clean_title=" ".join(words), tags=tuple(tags))
