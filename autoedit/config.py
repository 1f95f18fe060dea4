"""Runtime configuration for the snippet writer."""

import codecs
import os
from dataclasses import dataclass

from .models.edit_request import CommentStyle

ENV_ENCODING = "AUTOEDIT_ENCODING"
ENV_COMMENT_STYLE = "AUTOEDIT_COMMENT_STYLE"


@dataclass
class EditorConfig:
    """Defaults used when reading, backing up, and writing target files.

    Attributes:
        encoding: Text encoding of target and snippet files. Undecodable
            bytes are carried through unchanged.
        backup_timestamp_format: strftime format appended to backup names.
        closing_tag: Trailing delimiter that append mode keeps last.
        comment_style: Default comment style for marker lines.
    """

    encoding: str = "utf-8"
    backup_timestamp_format: str = "%Y%m%d%H%M%S"
    closing_tag: str = "?>"
    comment_style: CommentStyle = CommentStyle.BLOCK

    @classmethod
    def from_env(cls) -> "EditorConfig":
        """Build a config, applying AUTOEDIT_* environment overrides.

        Raises:
            ValueError: If AUTOEDIT_ENCODING names an unknown codec or
                AUTOEDIT_COMMENT_STYLE an unknown style.
        """
        config = cls()
        encoding = os.environ.get(ENV_ENCODING)
        if encoding:
            try:
                codecs.lookup(encoding)
            except LookupError:
                raise ValueError(f"Unknown encoding '{encoding}' in {ENV_ENCODING}") from None
            config.encoding = encoding
        comment_style = os.environ.get(ENV_COMMENT_STYLE)
        if comment_style:
            config.comment_style = CommentStyle.parse(comment_style)
        return config
