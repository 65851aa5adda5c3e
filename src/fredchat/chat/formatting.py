"""HTML formatting of bot replies.

Hides how a reply becomes a display-ready fragment and where the trust
boundary sits. The fragment is always a `<pre><code>` block; whether the
reply text is escaped first is the caller's decision.
"""

import html


class SafeHtml(str):
    """A string that a renderer may insert as HTML without further escaping."""

    __slots__ = ()

    def __html__(self) -> str:
        return str(self)


def format_code_block(code: str, trusted: bool = True) -> SafeHtml:
    """Wrap reply text in a preformatted code block.

    Args:
        code: Raw reply text
        trusted: Inject the text verbatim. Model output is only safe to
            treat this way in a controlled rendering context. When False
            the text is HTML-escaped.

    Returns:
        SafeHtml fragment `<pre><code>...</code></pre>`
    """
    body = code if trusted else html.escape(code)
    return SafeHtml(f"<pre><code>{body}</code></pre>")
