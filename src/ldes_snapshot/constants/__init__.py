"""Constants module for ldes_snapshot.

This module contains the RDF vocabulary shared by the extractor, the
selector and the assembler. It has no dependencies on other ldes_snapshot
modules.
"""

from ldes_snapshot.constants.vocabulary import (
    COLLECTION,
    DCT,
    DEFAULT_SNAPSHOT_SUFFIX,
    DEFAULT_TIMESTAMP_PATH,
    DEFAULT_VERSION_PATH,
    EVENT_STREAM,
    HAS_VERSION,
    LDES,
    RDF_TYPE,
    SNAPSHOT_OF,
    SNAPSHOT_UNTIL,
    TIMESTAMP_PATH,
    TREE,
    TREE_MEMBER,
    VERSION_MATERIALIZATION_OF,
    VERSION_MATERIALIZATION_UNTIL,
    VERSION_OF_PATH,
)

__all__ = [
    "LDES",
    "TREE",
    "DCT",
    "EVENT_STREAM",
    "COLLECTION",
    "RDF_TYPE",
    "TREE_MEMBER",
    "VERSION_OF_PATH",
    "TIMESTAMP_PATH",
    "SNAPSHOT_OF",
    "SNAPSHOT_UNTIL",
    "VERSION_MATERIALIZATION_OF",
    "VERSION_MATERIALIZATION_UNTIL",
    "HAS_VERSION",
    "DEFAULT_VERSION_PATH",
    "DEFAULT_TIMESTAMP_PATH",
    "DEFAULT_SNAPSHOT_SUFFIX",
]
