import re

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from mdit_py_plugins.attrs.parse import ParseError, parse

TRAILING_ATTRS_RE = re.compile(r"\s+(\{[^{}]*\})\s*$")


def heading_attrs_plugin(md: MarkdownIt):
    """Markdown-it-py plugin for pandoc style attributes after a heading,
    as in ``# Title {#intro .big}``. The braces are removed from the heading
    text and their classes and keys land on the ``heading_open`` token.
    """

    def _heading_attrs(state: StateCore):
        tokens = state.tokens
        for i, token in enumerate(tokens[:-1]):
            inline = tokens[i + 1]
            if token.type != "heading_open" or inline.type != "inline":
                continue
            match = TRAILING_ATTRS_RE.search(inline.content)
            if not match:
                continue
            try:
                _, attrs = parse(match.group(1))
            except ParseError:
                continue
            inline.content = inline.content[:match.start()]
            for key, value in attrs.items():
                if key == "class":
                    token.attrJoin("class", value)
                else:
                    token.attrSet(key, value)

    # Runs before inline parsing so the braces never reach the text
    md.core.ruler.after("block", "heading_attrs", _heading_attrs)
