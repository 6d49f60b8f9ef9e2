"""Unified diff rendering for reconstructed documents.

Contains:
- render_item: Render one DiffItem as unified diff text
- render_document: Render a whole DiffDocument
- format_diff_stat: Per-file addition/deletion summary
"""

from stashtree.diff.models import DiffDocument, DiffItem


def render_item(item: DiffItem) -> list[str]:
    """Render one file's change as unified diff lines.

    Args:
        item: The DiffItem to render.

    Returns:
        Lines without terminators.
    """
    lines = []
    if item.old_path is not None:
        lines.append(f"--- a/{item.old_path}")
    if item.new_path is not None:
        lines.append(f"+++ b/{item.new_path}")
    for hunk in item.hunks:
        lines.append(hunk.header)
        lines.extend(f"{line.origin}{line.content}" for line in hunk.lines)
    return lines


def render_document(document: DiffDocument) -> str:
    """Render a DiffDocument as unified diff text, in document order.

    Args:
        document: The reconstructed document.

    Returns:
        Unified diff text, newline-terminated unless empty.
    """
    lines = []
    for item in document:
        lines.extend(render_item(item))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def format_diff_stat(document: DiffDocument) -> str:
    """Summarise a document like ``git diff --stat``.

    Example output:
         src/main.py | 3 ++-
         1 file changed, 2 insertions(+), 1 deletion(-)
    """
    if not len(document):
        return " 0 files changed"

    width = max(len(item.display_path) for item in document)
    lines = []
    total_add = 0
    total_del = 0
    for item in document:
        additions = item.additions
        deletions = item.deletions
        total_add += additions
        total_del += deletions
        bar = "+" * additions + "-" * deletions
        lines.append(f" {item.display_path.ljust(width)} | {additions + deletions} {bar}".rstrip())

    files = len(document)
    summary = f" {files} file{'s' if files != 1 else ''} changed"
    summary += f", {total_add} insertion{'s' if total_add != 1 else ''}(+)"
    summary += f", {total_del} deletion{'s' if total_del != 1 else ''}(-)"
    lines.append(summary)
    return "\n".join(lines)
