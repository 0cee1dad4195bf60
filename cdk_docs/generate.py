"""
Generate Docusaurus reference pages from jsii assembly manifests.

Usage:
    cdk-docs-gen node_modules/@aws-cdk/aws-s3/.jsii [more .jsii ...] -o docs/reference

Input:
    One or more ``.jsii`` manifests. All of them are loaded into one type
    system so props interfaces inherited across assemblies resolve.

Output:
    <output>/framework-reference.md
    <output>/service-reference.md
    <output>/<assembly>/overview.md
    <output>/<assembly>/<resource>.md   – one per construct class
    <output>/sidebar.js
"""

from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Sequence

from cdk_docs.reflect import Assembly, CdkDocsError, ClassType, TypeSystem
from cdk_docs.render import (
    render_framework_reference_page,
    render_overview,
    render_resource_page,
    render_service_reference_page,
)

DEFAULT_OUTPUT_DIR = Path("docs") / "reference"

FRAMEWORK_REFERENCE_ID = "framework-reference"
SERVICE_REFERENCE_ID = "service-reference"
OVERVIEW_ID = "overview"


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def page_id(name: str) -> str:
    """Kebab-case slug: ``CfnBucket`` -> ``cfn-bucket``, ``@aws-cdk/aws-s3`` -> ``aws-cdk-aws-s3``."""
    slug = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", name)
    slug = re.sub(r"[^A-Za-z0-9]+", "-", slug)
    return slug.strip("-").lower()


def unique_page_id(name: str, taken: set[str]) -> str:
    """``page_id(name)``, suffixed ``-2``, ``-3``... until not in ``taken``; records the result."""
    base = page_id(name)
    candidate, n = base, 1
    while candidate in taken:
        n += 1
        candidate = f"{base}-{n}"
    taken.add(candidate)
    return candidate


def collect_resources(assembly: Assembly) -> list[ClassType]:
    return sorted((c for c in assembly.classes if c.is_resource), key=lambda c: c.name)


# ---------------------------------------------------------------------------
# Sidebar generator
# ---------------------------------------------------------------------------


def generate_sidebar(pages: dict[str, list[tuple[str, str]]]) -> str:
    """Build a sidebar module from ``{category: [(doc_id, label), ...]}``."""
    items: list[dict] = [
        {"type": "doc", "id": FRAMEWORK_REFERENCE_ID, "label": "Framework Reference"},
        {"type": "doc", "id": SERVICE_REFERENCE_ID, "label": "Service Reference"},
    ]
    for category, docs in pages.items():
        items.append({
            "type": "category",
            "label": category,
            "items": [{"type": "doc", "id": doc_id, "label": label} for doc_id, label in docs],
        })
    body = json.dumps(items, indent=2)
    return f"// Auto-generated sidebar for the construct library reference\nmodule.exports = {body};\n"


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def _write(path: Path, content: str, written: list[Path]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    written.append(path)
    print(f"  Wrote {path} ({len(content)} bytes)")


def generate(assembly_paths: Sequence[Path], output_dir: Path) -> list[Path]:
    """Load every manifest and write all pages under ``output_dir``."""
    system = TypeSystem()
    assemblies = []
    for path in assembly_paths:
        print(f"Loading jsii assembly from {path} ...")
        assembly = system.load(Path(path))
        print(f"  {assembly.name}@{assembly.version or '?'}: {len(assembly.types)} types")
        assemblies.append(assembly)

    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    _write(output_dir / f"{FRAMEWORK_REFERENCE_ID}.md",
           render_framework_reference_page(FRAMEWORK_REFERENCE_ID), written)
    _write(output_dir / f"{SERVICE_REFERENCE_ID}.md",
           render_service_reference_page(SERVICE_REFERENCE_ID), written)

    sidebar: dict[str, list[tuple[str, str]]] = {}
    slugs: set[str] = set()
    for assembly in assemblies:
        slug = unique_page_id(assembly.name, slugs)
        if assembly.readme is None:
            print(f"  WARNING: {assembly.name} has no README, overview uses a placeholder",
                  file=sys.stderr)
        _write(output_dir / slug / f"{OVERVIEW_ID}.md", render_overview(assembly, OVERVIEW_ID), written)
        docs = [(f"{slug}/{OVERVIEW_ID}", "Overview")]
        taken = {OVERVIEW_ID}

        resources = collect_resources(assembly)
        print(f"  {assembly.name}: {len(resources)} resources")
        for resource in resources:
            rid = unique_page_id(resource.name, taken)
            _write(output_dir / slug / f"{rid}.md", render_resource_page(resource, rid), written)
            docs.append((f"{slug}/{rid}", resource.name))
        sidebar[assembly.name] = docs

    _write(output_dir / "sidebar.js", generate_sidebar(sidebar), written)
    return written


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate Docusaurus reference pages from jsii assemblies.",
    )
    parser.add_argument("assemblies", nargs="+", type=Path, help=".jsii manifest(s) to document")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    args = parser.parse_args(argv)

    try:
        written = generate(args.assemblies, args.output)
    except CdkDocsError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(f"\nDone! {len(written)} files written.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
