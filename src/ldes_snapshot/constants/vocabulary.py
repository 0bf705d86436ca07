"""RDF vocabulary used by event streams and snapshots."""

from rdflib import Namespace
from rdflib.namespace import DCTERMS, RDF

LDES = Namespace("https://w3id.org/ldes#")
TREE = Namespace("https://w3id.org/tree#")
DCT = DCTERMS

# Types
EVENT_STREAM = LDES.EventStream
COLLECTION = TREE.Collection
RDF_TYPE = RDF.type

# Containment
TREE_MEMBER = TREE.member

# Stream declaration
VERSION_OF_PATH = LDES.versionOfPath
TIMESTAMP_PATH = LDES.timestampPath

# Non-materialized snapshot header
SNAPSHOT_OF = LDES.snapshotOf
SNAPSHOT_UNTIL = LDES.snapshotUntil

# Materialized snapshot header
VERSION_MATERIALIZATION_OF = LDES.versionMaterializationOf
VERSION_MATERIALIZATION_UNTIL = LDES.versionMaterializationUntil
HAS_VERSION = DCT.hasVersion

# Defaults for a freshly initialised snapshot description
DEFAULT_VERSION_PATH = DCT.isVersionOf
DEFAULT_TIMESTAMP_PATH = DCT.created

DEFAULT_SNAPSHOT_SUFFIX = "Snapshot"
