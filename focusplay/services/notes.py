# -*- coding: utf-8 -*-

from __future__ import annotations

import re
from typing import List

from markdown import markdown

_TASK_UNCHECKED = re.compile(r"^(\s*[-*+]\s+)\[ \]\s+")
_TASK_CHECKED = re.compile(r"^(\s*[-*+]\s+)\[(x|X)\]\s+")


def preprocess(md_text: str) -> str:
    """Checklist items "- [ ]" / "- [x]" become "- ☐" / "- ☑"."""
    if not md_text:
        return ""
    out: List[str] = []
    for line in md_text.splitlines():
        line = _TASK_CHECKED.sub(r"\1☑ ", line)
        line = _TASK_UNCHECKED.sub(r"\1☐ ", line)
        out.append(line)
    return "\n".join(out)


def escape_html(md_text: str) -> str:
    """Raw HTML in notes is shown as text, never passed through."""
    return md_text.replace("&", "&amp;").replace("<", "&lt;")


def render_notes(md_text: str) -> str:
    """Task notes (what to learn, key points) as an HTML fragment."""
    safe_md = preprocess(escape_html(md_text or ""))
    if not safe_md.strip():
        return ""
    return markdown(
        safe_md,
        extensions=["extra", "sane_lists", "nl2br", "admonition"],
        output_format="html5",
    )
