"""Markdown rendering for bot replies.

Replies come from the remote backend, so all input is HTML-escaped first and
links are only emitted for http, https and mailto targets.
"""

import html
import re

SAFE_LINK_SCHEMES = ("http://", "https://", "mailto:")


def _render_link(match: re.Match[str]) -> str:
    label, url = match.group(1), match.group(2).strip()
    if not url.lower().startswith(SAFE_LINK_SCHEMES):
        return label
    return f'<a href="{url}" class="text-teal-700 underline" target="_blank" rel="noopener">{label}</a>'


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    """
    # quote=True also escapes " and ', so no attribute can be closed from the text
    text = html.escape(text, quote=True)

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-teal-700 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*]+)\*", r"<em>\1</em>", text)
    text = re.sub(r"\[([^\]]+)\]\(([^)]+)\)", _render_link, text)

    # Bullet and numbered lists
    result: list[str] = []
    open_tag: str | None = None
    for line in text.split("\n"):
        stripped = line.strip()
        if re.match(r"^[-*]\s+", stripped):
            tag, item = "ul", re.sub(r"^[-*]\s+", "", stripped)
        elif re.match(r"^\d+\.\s+", stripped):
            tag, item = "ol", re.sub(r"^\d+\.\s+", "", stripped)
        else:
            tag, item = None, line

        if open_tag and tag != open_tag:
            result.append(f"</{open_tag}>")
            open_tag = None
        if tag and open_tag is None:
            style = "list-disc" if tag == "ul" else "list-decimal"
            result.append(f'<{tag} class="{style} list-inside my-2 space-y-1">')
            open_tag = tag
        result.append(f"<li>{item}</li>" if tag else item)
    if open_tag:
        result.append(f"</{open_tag}>")

    return "<br>".join(result)
