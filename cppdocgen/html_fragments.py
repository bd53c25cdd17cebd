"""HTML fragments shared by the entity, file and namespace pages."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import CppLexer

from cppdocgen.autolink import autolink
from cppdocgen.markdown_text import fmt_markdown
from cppdocgen.symbol import SymbolKind, Visibility

if TYPE_CHECKING:
    from cppdocgen.build_context import BuildContext
    from cppdocgen.doc_comment import Example
    from cppdocgen.entity import Param, TypeRef
    from cppdocgen.linker import Linker
    from cppdocgen.symbol import Symbol

_CPP_LEXER = CppLexer()
_EXAMPLE_FMT = HtmlFormatter(cssclass="highlight")

NO_DESCRIPTION = "<p class='no-description'>No description provided.</p>"


def fmt_section(title: str, items: list[str], *, open_: bool = True) -> str:
    """Collapsible section with a count badge; empty when there are no items."""
    if not items:
        return ""
    body = "\n".join(items)
    return (
        f"<details {'open ' if open_ else ''}class='section'>"
        f"<summary><span>{escape(title)}"
        f"<span class='badge'>{len(items)}</span></span></summary>"
        f"<div>\n{body}\n</div></details>"
    )


def fmt_type(type_ref: TypeRef | None, linker: Linker) -> str:
    """A type name, linked when it resolves."""
    if type_ref is None:
        return ""
    href = linker.type_href(type_ref)
    name = escape(type_ref.display)
    if href is None:
        return f"<span class='entity type disabled'>{name}</span>"
    return f"<a class='entity type' href='{escape(href)}'>{name}</a>"


def fmt_param(param: Param, linker: Linker) -> str:
    name = (
        f"<span class='name space-before'>{escape(param.name)}</span>"
        if param.name
        else ""
    )
    return f"<span class='entity var'>{fmt_type(param.type, linker)}{name}</span>"


def fmt_field(field: Symbol, context: BuildContext) -> str:
    """Field declaration line with its doc comment."""
    anchor = context.linker.anchor(field) or ""
    decl = (
        f"{fmt_type(field.field_type, context.linker)}"
        f"<span class='name space-before'>{escape(field.name)}</span>;"
    )
    return (
        f"<details class='entity-desc' id='{anchor}'>"
        f"<summary class='entity var'>{decl}</summary>"
        f"<div>{fmt_doc_comment(field, context)}</div></details>"
    )


def fmt_fun_signature(fun: Symbol, linker: Linker) -> str:
    """Declaration of a function or method, as a single line of HTML."""
    sig = fun.signature
    if sig is None:
        return f"<span class='name'>{escape(fun.name)}</span>()"
    params = "<span class='comma space-after'>,</span>".join(
        fmt_param(p, linker) for p in sig.params
    )
    parts = []
    if sig.is_static:
        parts.append("<span class='keyword space-after'>static</span>")
    if sig.is_virtual:
        parts.append("<span class='keyword space-after'>virtual</span>")
    parts.append(fmt_type(sig.return_type, linker))
    parts.append(f"<span class='name space-before'>{escape(fun.name)}</span>")
    parts.append(f"<span class='params'>({params})</span>")
    if sig.is_const:
        parts.append("<span class='keyword space-before'>const</span>")
    if sig.is_pure_virtual:
        parts.append(
            "<span class='space-before'>=</span><span class='literal'>0</span>"
        )
    return "".join(parts) + ";"


def fmt_fun_decl(fun: Symbol, context: BuildContext) -> str:
    """Collapsible function declaration with its doc comment."""
    anchor = context.linker.anchor(fun)
    id_attr = f" id='{anchor}'" if anchor else ""
    return (
        f"<details class='entity-desc'{id_attr}>"
        f"<summary class='entity fun'>{fmt_fun_signature(fun, context.linker)}"
        f"</summary><div>{fmt_doc_comment(fun, context)}</div></details>"
    )


def fmt_classlike_decl(symbol: Symbol, context: BuildContext) -> str:
    """One-line link to a class or struct page with its summary."""
    keyword = symbol.kind.value
    summary = symbol.doc.summary()
    return (
        f"<div class='entity {keyword}'>"
        f"<span class='keyword space-after'>{keyword}</span>"
        f"<a class='name' href='{escape(context.linker.href(symbol))}'>"
        f"{escape(symbol.name)}</a>"
        + (f"<p class='summary'>{escape(summary)}</p>" if summary else "")
        + "</div>"
    )


def fmt_prose(text: str | None, context: BuildContext) -> str:
    """Autolink symbol names, then render markdown."""
    if not text:
        return ""
    return fmt_markdown(autolink(text, context.graph, context.linker))


def fmt_example(example: Example) -> str:
    if example.analyze:
        return highlight(example.code, _CPP_LEXER, _EXAMPLE_FMT)
    return f"<pre><code>{escape(example.code)}</code></pre>"


def _fmt_named(
    title: str, pairs: tuple[tuple[str, str], ...], ctx: BuildContext
) -> str:
    rows = "".join(
        f"<div class='item'><p><code>{escape(name)}</code></p>"
        f"<div>{fmt_prose(text, ctx)}</div></div>"
        for name, text in pairs
    )
    css = title.lower().replace(" ", "-")
    return f"<section class='{css}'><h3>{title}</h3>{rows}</section>"


def _fmt_labelled(label: str, text: str, ctx: BuildContext) -> str:
    return (
        f"<section class='{label.lower()}'><p>{label}</p>"
        f"<div>{fmt_prose(text, ctx)}</div></section>"
    )


def fmt_doc_comment(symbol: Symbol, context: BuildContext) -> str:
    """Render a symbol's parsed comment: description, tags and examples."""
    doc = symbol.doc
    parts: list[str] = []

    meta = []
    if doc.version:
        meta.append(f"<p>Version {escape(doc.version)}</p>")
    if doc.since:
        meta.append(f"<p>Since {escape(doc.since)}</p>")
    if meta:
        parts.append(f"<div class='version'>{''.join(meta)}</div>")

    parts.append(fmt_prose(doc.description, context) or NO_DESCRIPTION)

    if doc.tparams:
        parts.append(_fmt_named("Template parameters", doc.tparams, context))
    if doc.params:
        parts.append(_fmt_named("Parameters", doc.params, context))
    if doc.returns:
        parts.append(_fmt_labelled("Returns", doc.returns, context))
    if doc.throws:
        parts.append(_fmt_labelled("Throws", doc.throws, context))
    parts.extend(_fmt_labelled("Note", note, context) for note in doc.notes)
    parts.extend(_fmt_labelled("Warning", warn, context) for warn in doc.warnings)

    if doc.see:
        links = []
        for target in doc.see:
            href = context.linker.resolve(target, symbol.parent)
            name = escape(target)
            links.append(
                f"<li><a href='{escape(href)}'>{name}</a></li>"
                if href
                else f"<li><code>{name}</code></li>"
            )
        items = "".join(links)
        parts.append(f"<section class='see'><p>See also</p><ul>{items}</ul></section>")

    parts.extend(
        f"<div class='example'>{fmt_example(example)}</div>"
        for example in doc.examples
    )
    return "\n".join(parts)


def fmt_include(symbol: Symbol, context: BuildContext) -> str:
    """`#include <...>` line, linked to the source tree when configured."""
    header = context.linker.header_path(symbol)
    if header is None:
        return ""
    path = escape(header.to_raw_string())
    url = context.linker.source_url(symbol)
    target = f"<a href='{escape(url)}'>{path}</a>" if url else path
    return f"<p class='header-link'><code>#include &lt;{target}&gt;</code></p>"


def fmt_members(symbol: Symbol, context: BuildContext) -> dict[str, str]:
    """Member sections of a class or struct page."""
    methods = symbol.children_of_kind(SymbolKind.METHOD)
    fields = symbol.children_of_kind(SymbolKind.FIELD)
    public = [m for m in methods if m.visibility is Visibility.PUBLIC]
    protected = [m for m in methods if m.visibility is Visibility.PROTECTED]
    static = [m for m in public if m.signature and m.signature.is_static]
    instance = [m for m in public if not (m.signature and m.signature.is_static)]
    return {
        "public_static_functions": fmt_section(
            "Public static methods", [fmt_fun_decl(m, context) for m in static]
        ),
        "public_member_functions": fmt_section(
            "Public member functions", [fmt_fun_decl(m, context) for m in instance]
        ),
        "protected_member_functions": fmt_section(
            "Protected member functions",
            [fmt_fun_decl(m, context) for m in protected],
        ),
        "public_members": fmt_section(
            "Fields",
            [
                fmt_field(f, context)
                for f in fields
                if f.visibility in (Visibility.PUBLIC, Visibility.PROTECTED)
            ],
        ),
    }


def fmt_listing(symbols: list[Symbol], context: BuildContext) -> dict[str, str]:
    """Namespace/file overview: child symbols grouped by kind with summaries."""

    def entry(s: Symbol) -> str:
        summary = s.doc.summary()
        link = (
            f"<a class='name' href='{escape(context.linker.href(s))}'>"
            f"{escape(s.name)}</a>"
        )
        if summary:
            link += f"<p class='summary'>{escape(summary)}</p>"
        return f"<div class='entity'>{link}</div>"

    def of(kind: SymbolKind) -> list[Symbol]:
        return sorted(
            (s for s in symbols if s.kind is kind), key=lambda s: s.name.lower()
        )

    return {
        "namespaces": fmt_section(
            "Namespaces", [entry(s) for s in of(SymbolKind.NAMESPACE)]
        ),
        "classes": fmt_section(
            "Classes", [fmt_classlike_decl(s, context) for s in of(SymbolKind.CLASS)]
        ),
        "structs": fmt_section(
            "Structs", [fmt_classlike_decl(s, context) for s in of(SymbolKind.STRUCT)]
        ),
        "functions": fmt_section(
            "Functions", [fmt_fun_decl(s, context) for s in of(SymbolKind.FUNCTION)]
        ),
    }
