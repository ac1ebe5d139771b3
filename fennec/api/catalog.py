"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Endpoint catalog.

Representative operations of the search API, declared as data. Every entry
is served by the same descriptor and execution code; adding an operation
means adding a declaration here, nothing else.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple

from fennec.exceptions import UnknownEndpointError
from fennec.request.endpoint import BodyUsage, Endpoint, PathPart
from fennec.request.params import Param, ParamKind


def _bool(description: str = "") -> Param:
    return Param(ParamKind.BOOL, description=description)


def _int(description: str = "") -> Param:
    return Param(ParamKind.INT, description=description)


def _str(description: str = "", wire: Optional[str] = None) -> Param:
    return Param(ParamKind.STRING, wire_name=wire, description=description)


def _list(description: str = "", wire: Optional[str] = None) -> Param:
    return Param(ParamKind.LIST, wire_name=wire, description=description)


def _duration(description: str = "") -> Param:
    return Param(ParamKind.DURATION, description=description)


def _free(description: str = "") -> Param:
    return Param(ParamKind.FREE_FORM, description=description)


_INDEX_SELECTION: Dict[str, Param] = {
    "allow_no_indices": _bool("ignore wildcard expressions that resolve into no indices"),
    "expand_wildcards": _str("expand wildcards to open, closed, none or all indices"),
    "ignore_unavailable": _bool("ignore missing or closed concrete indices"),
}

_SOURCE_FILTERING: Dict[str, Param] = {
    "source": _list("return the _source field or a list of fields", wire="_source"),
    "source_excludes": _list("fields to exclude from _source", wire="_source_excludes"),
    "source_includes": _list("fields to extract from _source", wire="_source_includes"),
}

_WRITE_CONTROL: Dict[str, Param] = {
    "refresh": _str("refresh affected shards: true, false or wait_for"),
    "routing": _str("specific routing value"),
    "timeout": _duration("explicit operation timeout"),
    "wait_for_active_shards": _str("active shard copies required before proceeding"),
}

# Single-document operations fall back to the `_doc` type when none is given.
_DOCUMENT_PATH = (
    PathPart("index", required=True),
    PathPart("document_type", default="_doc"),
    PathPart("id", required=True),
)


# ---------------------------------------------------------------------------
# Root operations
# ---------------------------------------------------------------------------

INFO = Endpoint(
    name="info",
    method="GET",
    path=(),
    description="Returns basic information about the cluster.",
)

PING = Endpoint(
    name="ping",
    method="HEAD",
    path=(),
    description="Returns whether the cluster is running.",
)

SEARCH = Endpoint(
    name="search",
    method="GET",
    path=(PathPart("index"), PathPart("document_type"), "_search"),
    params={
        **_INDEX_SELECTION,
        **_SOURCE_FILTERING,
        "allow_partial_search_results": _bool("return partial results on shard failure or timeout"),
        "analyzer": _str("analyzer for the query string"),
        "analyze_wildcard": _bool("analyze wildcard and prefix queries"),
        "batched_reduce_size": _int("shard results reduced at once on the coordinating node"),
        "default_operator": _str("default operator for query string query: AND or OR"),
        "df": _str("default field for query string query"),
        "docvalue_fields": _list("fields to return as docvalue representation"),
        "explain": _bool("return detailed score computation"),
        "from_": Param(ParamKind.INT, wire_name="from", description="starting offset"),
        "ignore_throttled": _bool("ignore throttled indices"),
        "lenient": _bool("ignore format-based query failures"),
        "max_concurrent_shard_requests": _int("concurrent shard requests per node"),
        "preference": _str("node or shard to run on"),
        "pre_filter_shard_size": _int("shard count that triggers a pre-filter round trip"),
        "query": _str("query in Lucene query string syntax", wire="q"),
        "request_cache": _bool("use the request cache"),
        "rest_total_hits_as_int": _bool("render hits.total as a number"),
        "routing": _list("routing values"),
        "scroll": _duration("how long to keep the search context for scrolling"),
        "search_type": _str("search operation type"),
        "seq_no_primary_term": _bool("return sequence number and primary term of each hit"),
        "size": _int("number of hits to return"),
        "sort": _list("<field>:<direction> pairs"),
        "stats": _list("statistics tags"),
        "stored_fields": _list("stored fields to return"),
        "suggest_field": _str("field to use for suggestions"),
        "suggest_mode": _str("suggest mode"),
        "suggest_size": _int("number of suggestions"),
        "suggest_text": _str("source text for suggestions"),
        "terminate_after": _int("maximum documents to collect per shard"),
        "timeout": _duration("explicit operation timeout"),
        "track_scores": _bool("calculate scores even when not sorting by them"),
        "track_total_hits": _free("track the total hit count: a bool or a count"),
        "typed_keys": _bool("prefix aggregation names with their types"),
        "version": _bool("return document versions"),
    },
    body=BodyUsage.OPTIONAL,
    description="Returns results matching a query.",
)

COUNT = Endpoint(
    name="count",
    method="GET",
    path=(PathPart("index"), PathPart("document_type"), "_count"),
    params={
        **_INDEX_SELECTION,
        "analyzer": _str("analyzer for the query string"),
        "default_operator": _str("default operator for query string query"),
        "df": _str("default field for query string query"),
        "lenient": _bool("ignore format-based query failures"),
        "min_score": _free("include only documents with at least this score"),
        "preference": _str("node or shard to run on"),
        "query": _str("query in Lucene query string syntax", wire="q"),
        "routing": _list("routing values"),
        "terminate_after": _int("maximum documents to count per shard"),
    },
    body=BodyUsage.OPTIONAL,
    description="Returns the number of documents matching a query.",
)

GET = Endpoint(
    name="get",
    method="GET",
    path=_DOCUMENT_PATH,
    params={
        **_SOURCE_FILTERING,
        "preference": _str("node or shard to run on"),
        "realtime": _bool("realtime or search mode"),
        "refresh": _bool("refresh the shard before the operation"),
        "routing": _str("specific routing value"),
        "stored_fields": _list("stored fields to return"),
        "version": _int("explicit version for concurrency control"),
        "version_type": _str("version type"),
    },
    description="Returns a document.",
)

EXISTS = Endpoint(
    name="exists",
    method="HEAD",
    path=_DOCUMENT_PATH,
    params=dict(GET.params),
    description="Returns whether a document exists.",
)

INDEX = Endpoint(
    name="index",
    method="PUT",
    path=_DOCUMENT_PATH,
    params={
        **_WRITE_CONTROL,
        "if_primary_term": _int("only perform if the last change has this primary term"),
        "if_seq_no": _int("only perform if the last change has this sequence number"),
        "op_type": _str("index or create"),
        "pipeline": _str("ingest pipeline id"),
        "version": _int("explicit version for concurrency control"),
        "version_type": _str("version type"),
    },
    body=BodyUsage.REQUIRED,
    description="Creates or updates a document in an index.",
)

DELETE = Endpoint(
    name="delete",
    method="DELETE",
    path=_DOCUMENT_PATH,
    params={
        **_WRITE_CONTROL,
        "if_primary_term": _int("only perform if the last change has this primary term"),
        "if_seq_no": _int("only perform if the last change has this sequence number"),
        "version": _int("explicit version for concurrency control"),
        "version_type": _str("version type"),
    },
    description="Removes a document from the index.",
)

BULK = Endpoint(
    name="bulk",
    method="POST",
    path=(PathPart("index"), PathPart("document_type"), "_bulk"),
    params={
        **_SOURCE_FILTERING,
        **_WRITE_CONTROL,
        "pipeline": _str("default ingest pipeline id"),
    },
    body=BodyUsage.REQUIRED,
    description="Performs multiple index, update and delete operations in one request.",
)

SCROLL = Endpoint(
    name="scroll",
    method="GET",
    path=("_search", "scroll", PathPart("scroll_id")),
    params={
        "scroll": _duration("how long to keep the search context"),
        "rest_total_hits_as_int": _bool("render hits.total as a number"),
    },
    body=BodyUsage.OPTIONAL,
    description="Retrieves the next batch of results of a scrolling search.",
)

CLEAR_SCROLL = Endpoint(
    name="clear_scroll",
    method="DELETE",
    path=("_search", "scroll", PathPart("scroll_id")),
    body=BodyUsage.OPTIONAL,
    description="Explicitly clears the search context for a scroll.",
)


# ---------------------------------------------------------------------------
# Cat
# ---------------------------------------------------------------------------

_CAT_COMMON: Dict[str, Param] = {
    "format": _str("response format: text, json, yaml"),
    "h": _list("column names to display"),
    "help": _bool("return help information"),
    "local": _bool("read from the local node only"),
    "master_timeout": _duration("timeout for connection to the master node"),
    "s": _list("column names to sort by"),
    "v": _bool("verbose mode, display column headers"),
}

CAT_INDICES = Endpoint(
    name="cat.indices",
    method="GET",
    path=("_cat", "indices", PathPart("index")),
    params={
        **_CAT_COMMON,
        "bytes": _str("unit in which to display byte values"),
        "health": _str("only show indices with this health: green, yellow or red"),
        "pri": _bool("show primary shard statistics only"),
    },
    description="Returns information about indices.",
)

CAT_HEALTH = Endpoint(
    name="cat.health",
    method="GET",
    path=("_cat", "health"),
    params={**_CAT_COMMON, "ts": _bool("include a timestamp")},
    description="Returns a concise representation of the cluster health.",
)


# ---------------------------------------------------------------------------
# Cluster
# ---------------------------------------------------------------------------

CLUSTER_HEALTH = Endpoint(
    name="cluster.health",
    method="GET",
    path=("_cluster", "health", PathPart("index")),
    params={
        "expand_wildcards": _str("expand wildcards to open, closed, none or all indices"),
        "level": _str("detail level: cluster, indices or shards"),
        "local": _bool("read from the local node only"),
        "master_timeout": _duration("timeout for connection to the master node"),
        "timeout": _duration("explicit operation timeout"),
        "wait_for_active_shards": _str("wait until this many shards are active"),
        "wait_for_events": _str("wait until queued events with this priority are processed"),
        "wait_for_no_initializing_shards": _bool("wait for no initializing shards"),
        "wait_for_no_relocating_shards": _bool("wait for no relocating shards"),
        "wait_for_nodes": _str("wait until this many nodes are available"),
        "wait_for_status": _str("wait until the cluster reaches this status"),
    },
    description="Returns basic information about the health of the cluster.",
)


# ---------------------------------------------------------------------------
# Indices
# ---------------------------------------------------------------------------

INDICES_CREATE = Endpoint(
    name="indices.create",
    method="PUT",
    path=(PathPart("index", required=True),),
    params={
        "include_type_name": _bool("whether mappings are keyed by type"),
        "master_timeout": _duration("timeout for connection to the master node"),
        "timeout": _duration("explicit operation timeout"),
        "wait_for_active_shards": _str("active shards required before returning"),
    },
    body=BodyUsage.OPTIONAL,
    description="Creates an index with optional settings and mappings.",
)

INDICES_DELETE = Endpoint(
    name="indices.delete",
    method="DELETE",
    path=(PathPart("index", required=True),),
    params={
        **_INDEX_SELECTION,
        "master_timeout": _duration("timeout for connection to the master node"),
        "timeout": _duration("explicit operation timeout"),
    },
    description="Deletes an index.",
)

INDICES_EXISTS = Endpoint(
    name="indices.exists",
    method="HEAD",
    path=(PathPart("index", required=True),),
    params={
        **_INDEX_SELECTION,
        "flat_settings": _bool("return settings in flat format"),
        "include_defaults": _bool("return all default settings"),
        "local": _bool("read from the local node only"),
    },
    description="Returns information about whether a particular index exists.",
)

INDICES_REFRESH = Endpoint(
    name="indices.refresh",
    method="POST",
    path=(PathPart("index"), "_refresh"),
    params=dict(_INDEX_SELECTION),
    description="Performs the refresh operation in one or more indices.",
)

INDICES_CLEAR_CACHE = Endpoint(
    name="indices.clear_cache",
    method="POST",
    path=(PathPart("index"), "_cache", "clear"),
    params={
        **_INDEX_SELECTION,
        "fielddata": _bool("clear field data"),
        "fields": _list("fields to clear when using the fielddata parameter"),
        "query": _bool("clear query caches"),
        "request": _bool("clear request cache"),
    },
    description="Clears all or specific caches for one or more indices.",
)


ENDPOINTS: Tuple[Endpoint, ...] = (
    INFO,
    PING,
    SEARCH,
    COUNT,
    GET,
    EXISTS,
    INDEX,
    DELETE,
    BULK,
    SCROLL,
    CLEAR_SCROLL,
    CAT_INDICES,
    CAT_HEALTH,
    CLUSTER_HEALTH,
    INDICES_CREATE,
    INDICES_DELETE,
    INDICES_EXISTS,
    INDICES_REFRESH,
    INDICES_CLEAR_CACHE,
)

_BY_NAME: Mapping[str, Endpoint] = {e.name: e for e in ENDPOINTS}


def get_endpoint(name: str) -> Endpoint:
    """Look up an endpoint by its dotted name.

    Raises:
        UnknownEndpointError: If no endpoint has that name.
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownEndpointError(f"unknown endpoint '{name}'") from None


def namespaces() -> Dict[str, Dict[str, Endpoint]]:
    """Group endpoints by namespace; root operations live under ``""``."""
    grouped: Dict[str, Dict[str, Endpoint]] = {}
    for endpoint in ENDPOINTS:
        namespace, _, short = endpoint.name.rpartition(".")
        grouped.setdefault(namespace, {})[short] = endpoint
    return grouped
