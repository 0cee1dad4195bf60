"""
Render jsii assembly metadata as Docusaurus markdown pages.

Every function here is pure: it takes reflected metadata and returns the
page text, front-matter included. Writing files is left to
:mod:`cdk_docs.generate`.
"""

from __future__ import annotations

from typing import Any

import yaml

from cdk_docs.reflect import Assembly, ClassType, InterfaceType, Property, TypeReference, simple_name

BADGE_OPTIONAL = "![Optional](https://img.shields.io/badge/-Optional-inactive.svg)"
BADGE_REQUIRED = "![Required](https://img.shields.io/badge/-Required-important.svg)"

README_FALLBACK = "Oops!"
PLACEHOLDER_BODY = "Lorem Ipsum..."

# ---------------------------------------------------------------------------
# Front-matter helper
# ---------------------------------------------------------------------------


def front_matter(document: str, fields: dict[str, Any]) -> str:
    """Prefix ``document`` with a YAML front-matter block built from ``fields``."""
    header = yaml.safe_dump(
        fields,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    ).strip()
    return f"---\n{header}\n---\n{document}"


# ---------------------------------------------------------------------------
# Page generators
# ---------------------------------------------------------------------------


def render_overview(assembly: Assembly, id: str) -> str:
    markdown = (assembly.readme.markdown if assembly.readme else "") or README_FALLBACK
    return front_matter(markdown, {"id": id, "hide_title": True, "sidebar_label": "Overview"})


def render_resource_page(resource: ClassType, id: str) -> str:
    """Generate the property reference page of a construct class.

    The props interface is the type of the third initializer parameter,
    following the ``(scope, id, props)`` construct signature.
    """
    props: InterfaceType = resource.assembly.find_type(resource.initializer.parameters[2].type.fqn)
    properties = sort_properties(props.get_properties(inherited=True))

    def _table_line(prop: Property) -> str:
        badge = BADGE_OPTIONAL if prop.type.optional else BADGE_REQUIRED
        return "|".join([
            f"`{prop.name}`",
            badge,
            _format_type(prop.type, resource.assembly),
        ])

    def _detail(prop: Property) -> str:
        optional = prop.type.optional
        comment = prop.docs.comment
        default = prop.docs.default
        return "\n".join([
            "\n---",
            f"### `{prop.name}{'?' if optional else ''}`",
            "\n".join(f"> {line}" for line in comment.split("\n")) + "\n" if comment else "",
            f"*{'Optional' if optional else 'Required'}* {_format_type(prop.type, resource.assembly)}",
            f", *default:* {default}" if default else "",
        ])

    markdown = "\n".join([
        resource.docs.comment or "",
        "## Properties",
        "Name | Required | Type",
        "-----|:--------:|-----",
        *(_table_line(p) for p in properties),
        *(_detail(p) for p in properties),
    ])
    return front_matter(markdown, {"id": id, "title": resource.name})


def render_framework_reference_page(id: str) -> str:
    return front_matter(
        PLACEHOLDER_BODY,
        {"id": id, "title": "Framework Reference", "sidebar_label": "Overview"},
    )


def render_service_reference_page(id: str) -> str:
    return front_matter(
        PLACEHOLDER_BODY,
        {"id": id, "title": "Service Reference", "sidebar_label": "Overview"},
    )


# ---------------------------------------------------------------------------
# Type formatting
# ---------------------------------------------------------------------------


# Underscore collates before digits and letters, as in locale-aware ordering.
_COLLATION = str.maketrans({"_": " "})


def _name_key(name: str) -> tuple[str, str]:
    # Names differing only by case: lowercase first.
    return name.casefold().translate(_COLLATION), name.swapcase()


def sort_properties(properties: list[Property]) -> list[Property]:
    """Required properties first, then optional; each group by name."""
    return sorted(properties, key=lambda p: (p.type.optional, *_name_key(p.name)))


def _format_type(reference: TypeReference, relative_to: Assembly, quote: bool = True) -> str:
    def _quoted(text: str) -> str:
        return f"`{text}`" if quote else text

    if reference.union_of_types:
        return " or ".join(_format_type(ref, relative_to, quote) for ref in reference.union_of_types)
    if reference.primitive:
        return _quoted(reference.primitive)
    if reference.array_of_type:
        return _quoted(f"Array<{_format_type(reference.array_of_type, relative_to, False)}>")
    if reference.map_of_type:
        return _quoted(f"Map<string, {_format_type(reference.map_of_type, relative_to, False)}>")

    fqn = reference.fqn
    if relative_to.assembly_name_of(fqn) == relative_to.name:
        return _quoted(simple_name(fqn))
    return _quoted(fqn)
