"""Markdown parser for Obsidian notes."""

import frontmatter


def note_body(content: str) -> str:
    """Return the markdown body of a note, frontmatter removed.

    The frontmatter block is dropped so that YAML lists are never mistaken
    for task bullets.
    """
    return frontmatter.loads(content).content
