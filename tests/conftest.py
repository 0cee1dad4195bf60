"""Pytest configuration and shared fixtures."""

import json

import pytest

from cdk_docs.reflect import TypeSystem


@pytest.fixture
def core_manifest():
    """A minimal framework assembly other libraries depend on."""
    return {
        "name": "@aws-cdk/core",
        "version": "1.0.0",
        "types": {
            "@aws-cdk/core.Construct": {
                "kind": "class",
                "fqn": "@aws-cdk/core.Construct",
                "name": "Construct",
                "initializer": {
                    "parameters": [
                        {"name": "scope", "type": {"fqn": "@aws-cdk/core.Construct"}},
                        {"name": "id", "type": {"primitive": "string"}},
                    ]
                },
            },
            "@aws-cdk/core.Duration": {
                "kind": "class",
                "fqn": "@aws-cdk/core.Duration",
                "name": "Duration",
            },
            "@aws-cdk/core.ResourceProps": {
                "kind": "interface",
                "fqn": "@aws-cdk/core.ResourceProps",
                "name": "ResourceProps",
                "properties": [
                    {
                        "name": "physicalName",
                        "optional": True,
                        "type": {"primitive": "string"},
                        "docs": {"summary": "The physical name."},
                    }
                ],
            },
        },
    }


@pytest.fixture
def s3_manifest():
    """A service assembly with one construct and its props interface."""
    return {
        "name": "@aws-cdk/aws-s3",
        "version": "1.2.3",
        "dependencies": {"@aws-cdk/core": "1.0.0"},
        "readme": {"markdown": "# Amazon S3 Construct Library\n\nBuckets and things."},
        "types": {
            "@aws-cdk/aws-s3.Bucket": {
                "kind": "class",
                "fqn": "@aws-cdk/aws-s3.Bucket",
                "name": "Bucket",
                "base": "@aws-cdk/core.Construct",
                "docs": {"summary": "An S3 bucket.", "remarks": "Stores objects."},
                "initializer": {
                    "parameters": [
                        {"name": "scope", "type": {"fqn": "@aws-cdk/core.Construct"}},
                        {"name": "id", "type": {"primitive": "string"}},
                        {
                            "name": "props",
                            "optional": True,
                            "type": {"fqn": "@aws-cdk/aws-s3.BucketProps"},
                        },
                    ]
                },
            },
            "@aws-cdk/aws-s3.BucketPolicy": {
                "kind": "class",
                "fqn": "@aws-cdk/aws-s3.BucketPolicy",
                "name": "BucketPolicy",
                "initializer": {
                    "parameters": [
                        {"name": "scope", "type": {"fqn": "@aws-cdk/core.Construct"}},
                        {"name": "id", "type": {"primitive": "string"}},
                    ]
                },
            },
            "@aws-cdk/aws-s3.BucketProps": {
                "kind": "interface",
                "fqn": "@aws-cdk/aws-s3.BucketProps",
                "name": "BucketProps",
                "interfaces": ["@aws-cdk/core.ResourceProps"],
                "properties": [
                    {
                        "name": "versioned",
                        "type": {"primitive": "boolean"},
                    },
                    {
                        "name": "bucketName",
                        "optional": True,
                        "type": {"primitive": "string"},
                        "docs": {
                            "summary": "Physical name of this bucket.",
                            "default": "Assigned by CloudFormation",
                        },
                    },
                    {
                        "name": "encryption",
                        "optional": True,
                        "type": {"fqn": "@aws-cdk/aws-s3.BucketEncryption"},
                    },
                    {
                        "name": "tags",
                        "type": {
                            "collection": {"kind": "map", "elementtype": {"primitive": "string"}}
                        },
                        "docs": {"comment": "Tags to apply.\nKeys must be unique."},
                    },
                    {
                        "name": "lifecycleRules",
                        "optional": True,
                        "type": {
                            "collection": {
                                "kind": "array",
                                "elementtype": {"fqn": "@aws-cdk/aws-s3.LifecycleRule"},
                            }
                        },
                    },
                    {
                        "name": "retention",
                        "optional": True,
                        "type": {
                            "union": {
                                "types": [
                                    {"fqn": "@aws-cdk/core.Duration"},
                                    {"primitive": "number"},
                                ]
                            }
                        },
                    },
                ],
            },
            "@aws-cdk/aws-s3.LifecycleRule": {
                "kind": "interface",
                "fqn": "@aws-cdk/aws-s3.LifecycleRule",
                "name": "LifecycleRule",
                "properties": [],
            },
            "@aws-cdk/aws-s3.BucketEncryption": {
                "kind": "enum",
                "fqn": "@aws-cdk/aws-s3.BucketEncryption",
                "name": "BucketEncryption",
                "members": [{"name": "KMS"}, {"name": "S3_MANAGED"}],
            },
        },
    }


@pytest.fixture
def manifest_files(tmp_path, core_manifest, s3_manifest):
    """Write both manifests to disk and return their paths (core first)."""
    paths = []
    for name, manifest in (("core", core_manifest), ("s3", s3_manifest)):
        path = tmp_path / "assemblies" / name / ".jsii"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps(manifest), encoding="utf-8")
        paths.append(path)
    return paths


@pytest.fixture
def type_system(manifest_files):
    system = TypeSystem()
    for path in manifest_files:
        system.load(path)
    return system


@pytest.fixture
def s3_assembly(type_system):
    return type_system.assemblies["@aws-cdk/aws-s3"]
