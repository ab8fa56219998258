"""
Type aliases for envgen.

Provides reusable, descriptive type aliases for the mappings
passed between the parser, builder and serializer.
"""

from typing import Dict, Mapping


# Read-only view of the process environment: {key: value}
EnvironmentSnapshot = Mapping[str, str]

# Ordered result of the lookup, in template order: {key: value}
ExportSet = Dict[str, str]
