"""Sample streams and member builders shared by the tests."""

from datetime import datetime, timezone

from rdflib import Literal, Namespace
from rdflib.namespace import DCTERMS

from ldes_snapshot.types import Member
from ldes_snapshot.utils import to_datetime_literal

EX = Namespace("http://example.org/")
DCT = DCTERMS

STREAM_TTL = """
@prefix dct: <http://purl.org/dc/terms/> .
@prefix ldes: <https://w3id.org/ldes#> .
@prefix tree: <https://w3id.org/tree#> .
@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .
@prefix ex: <http://example.org/> .

ex:ES a ldes:EventStream;
    ldes:versionOfPath dct:isVersionOf;
    ldes:timestampPath dct:issued;
    tree:member ex:resource1v0, ex:resource1v1.

ex:resource1v0
    dct:isVersionOf ex:resource1;
    dct:issued "2021-12-15T10:00:00.000Z"^^xsd:dateTime;
    dct:title "First version of the title".

ex:resource1v1
    dct:isVersionOf ex:resource1;
    dct:issued "2021-12-15T12:00:00.000Z"^^xsd:dateTime;
    dct:title "Title has been updated once".
"""

BLANK_NODE_STREAM_TTL = """
@prefix dct: <http://purl.org/dc/terms/> .
@prefix ldes: <https://w3id.org/ldes#> .
@prefix tree: <https://w3id.org/tree#> .
@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .
@prefix ex: <http://example.org/> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .

ex:ES1 a ldes:EventStream;
    ldes:versionOfPath dct:isVersionOf;
    ldes:timestampPath dct:created;
    tree:member [
        dct:isVersionOf ex:A ;
        dct:created "2020-10-05T11:00:00Z"^^xsd:dateTime;
        owl:versionInfo "v0.0.1";
        rdfs:label "A v0.0.1"
    ], [
        dct:isVersionOf ex:A ;
        dct:created "2020-10-06T13:00:00Z"^^xsd:dateTime;
        owl:versionInfo "v0.0.2";
        rdfs:label "A v0.0.2"
    ].
"""


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_version(member_id, object_id, timestamp, title=None):
    """A Member with dct:isVersionOf / dct:issued statements."""
    statements = [
        (member_id, DCT.isVersionOf, object_id),
        (member_id, DCT.issued, to_datetime_literal(timestamp)),
    ]
    if title is not None:
        statements.append((member_id, DCT.title, Literal(title)))
    return Member(id=member_id, statements=statements)
