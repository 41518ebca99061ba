from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock


def speaker_notes_plugin(md: MarkdownIt):
    """Markdown-it-py plugin that turns lines beginning with `???` into
    ``speaker_note`` tokens. The reader maps them to note containers, which
    the renderer keeps off the slides.
    """

    def _note_block(state: StateBlock, start_line: int, end_line: int, silent: bool):
        src = state.src
        line_start = state.bMarks[start_line] + state.tShift[start_line]
        max_pos = state.eMarks[start_line]

        # Must start with ??? (optionally preceded by spaces)
        if not src.startswith('???', line_start):
            return False

        # Content after the ??? marker
        content_start = line_start + 3
        note_content = src[content_start:max_pos].strip()

        if silent:
            return True

        token = state.push('speaker_note', '', 0)
        token.content = note_content
        token.map = [start_line, start_line + 1]

        state.line = start_line + 1
        return True

    # Insert before paragraph rule so it captures lines first
    md.block.ruler.before('paragraph', 'speaker_notes', _note_block)
