"""Parse raw doc comments into DocComment objects."""

from __future__ import annotations

import logging
import textwrap

from cppdocgen.comment_lexer import CommentLexer
from cppdocgen.doc_comment import DocComment, Example

logger = logging.getLogger(__name__)


def _code_block(raw: str) -> str:
    """Drop surrounding blank lines and the common indentation."""
    lines = raw.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return textwrap.dedent("\n".join(lines))


def parse_doc_comment(raw: str | None) -> DocComment:
    """Parse a comment; never raises, whatever the input looks like."""
    if not raw:
        return DocComment()

    lexer = CommentLexer(raw)

    def param_for(cmd: str) -> str:
        param = lexer.next_param()
        if param is None:
            logger.warning("Doc comment: expected parameter for @%s", cmd)
            return ""
        return param

    def raw_value_for(cmd: str) -> str:
        value = lexer.next_value()
        if value is None:
            logger.warning("Doc comment: expected value for @%s", cmd)
            return ""
        return value

    def value_for(cmd: str) -> str:
        return raw_value_for(cmd).strip()

    description: str | None = None
    params: list[tuple[str, str]] = []
    tparams: list[tuple[str, str]] = []
    returns: str | None = None
    throws: str | None = None
    see: list[str] = []
    notes: list[str] = []
    warnings: list[str] = []
    version: str | None = None
    since: str | None = None
    examples: list[Example] = []

    while True:
        command = lexer.next_command()
        if command is None:
            break
        cmd, attrs = command
        if cmd in {"description", "desc"}:
            description = value_for(cmd)
        elif cmd in {"param", "arg"}:
            params.append((param_for(cmd), value_for(cmd)))
        elif cmd in {"tparam", "targ"}:
            tparams.append((param_for(cmd), value_for(cmd)))
        elif cmd in {"return", "returns"}:
            returns = value_for(cmd)
        elif cmd == "throws":
            throws = value_for(cmd)
        elif cmd == "see":
            see.append(value_for(cmd))
        elif cmd == "note":
            notes.append(value_for(cmd))
        elif cmd in {"warning", "warn"}:
            warnings.append(value_for(cmd))
        elif cmd == "version":
            version = value_for(cmd)
        elif cmd == "since":
            since = value_for(cmd)
        elif cmd in {"example", "code"}:
            analyze = attrs.get("analyze", "false").lower() not in {"false", "0", "no"}
            examples.append(Example(_code_block(raw_value_for(cmd)), analyze=analyze))
        else:
            # The value of an unknown command is read and thrown away
            logger.warning("Doc comment: unknown command @%s", cmd)
            lexer.next_value()

    return DocComment(
        description=description or None,
        params=tuple(params),
        tparams=tuple(tparams),
        returns=returns,
        throws=throws,
        see=tuple(see),
        notes=tuple(notes),
        warnings=tuple(warnings),
        version=version,
        since=since,
        examples=tuple(examples),
    )
