"""Docusaurus reference pages for jsii construct libraries."""

from cdk_docs.reflect import (
    Assembly,
    AssemblyLoadError,
    CdkDocsError,
    ClassType,
    EnumType,
    InterfaceType,
    Property,
    TypeNotFoundError,
    TypeReference,
    TypeSystem,
    load_assembly,
)
from cdk_docs.render import (
    front_matter,
    render_framework_reference_page,
    render_overview,
    render_resource_page,
    render_service_reference_page,
)

__version__ = "0.1.0"
