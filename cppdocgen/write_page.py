"""The per-page task: render templates and write the page directory."""

from __future__ import annotations

import json
from html import escape
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cppdocgen.build_context import BuildContext
    from cppdocgen.page_output import PageOutput


def write_page(context: BuildContext, page: PageOutput, nav: str) -> None:
    """Render one page and write `index.html`, `content.html` and `metadata.json`.

    Runs on a worker thread; everything it reads is shared read-only.
    """
    renderer = context.renderer
    fragments = {
        **context.default_fragments(),
        "page_url": str(page.url.to_absolute(context.config.output_url)),
        "page_title": escape(page.title),
        "page_description": escape(page.description),
        **page.fragments,
    }
    content = renderer.render_text(page.template, fragments)
    head = renderer.render_text("head", fragments)
    html = renderer.render(
        "page",
        {
            **fragments,
            "head_content": head,
            "navbar_content": nav,
            "main_content": content,
        },
    )

    out_dir = context.config.output_dir / page.url.to_path()
    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / "content.html").write_text(content, encoding="utf-8")
    (out_dir / "index.html").write_bytes(html)
    metadata = {"title": page.title, "description": page.description}
    (out_dir / "metadata.json").write_text(
        json.dumps(metadata, indent=2), encoding="utf-8"
    )
