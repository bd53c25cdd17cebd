"""Default HTML templates, keyed by template id.

Templates are `str.format_map` strings; literal braces must be doubled.
"""

PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
{head_content}
</head>
<body>
<nav class="navbar">
{navbar_content}
</nav>
<main class="content" data-url="{page_url}">
{main_content}
</main>
</body>
</html>
"""

HEAD = """<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{page_title}</title>
<meta name="description" content="{page_description}">
<meta name="generator" content="cppdocgen">
"""

NAV = """<div class="nav-header">
<a href="{output_url}">{project_name}</a>
<span class="version">{project_version}</span>
</div>
<details open class="nav-section tutorials">
<summary>Tutorials</summary>
{tutorial_content}
</details>
<details open class="nav-section entities">
<summary>Classes</summary>
{entity_content}
</details>
<details class="nav-section files">
<summary>Files</summary>
{file_content}
</details>
"""

CLASS = """<h1 class="entity-title"><span class="keyword">class</span> {name}</h1>
{include}
{description}
{public_static_functions}
{public_member_functions}
{protected_member_functions}
{public_members}
"""

STRUCT = """<h1 class="entity-title"><span class="keyword">struct</span> {name}</h1>
{include}
{description}
{public_static_functions}
{public_member_functions}
{protected_member_functions}
{public_members}
"""

FUNCTION = """<h1 class="entity-title"><span class="keyword">function</span> {name}</h1>
{include}
{declaration}
{description}
"""

NAMESPACE = """<h1 class="entity-title">
<span class="keyword">namespace</span> {name}</h1>
{description}
{namespaces}
{classes}
{structs}
{functions}
"""

FILE = """<h1 class="entity-title">{name}</h1>
<p class="file-path"><a href="{file_url}">{file_path}</a></p>
{functions}
{classes}
{structs}
"""

TUTORIAL = """<article class="tutorial">
{content}
</article>
"""

TUTORIAL_INDEX = """<h1>{name}</h1>
<article class="tutorial">
{content}
</article>
{tutorials}
"""

INDEX = """<h1>{project_name} <span class="version">{project_version}</span></h1>
{listing}
"""

DEFAULT_TEMPLATES: dict[str, str] = {
    "page": PAGE,
    "head": HEAD,
    "nav": NAV,
    "class": CLASS,
    "struct": STRUCT,
    "function": FUNCTION,
    "namespace": NAMESPACE,
    "file": FILE,
    "tutorial": TUTORIAL,
    "tutorial_index": TUTORIAL_INDEX,
    "index": INDEX,
}
