"""Turning transcript markup into debate records."""
from __future__ import annotations

from .accumulator import DebateAccumulator, OrderedIdentifiers
from .chambers import CHAMBERS, CHAMBER_PROFILES, ChamberProfile, DEFAULT_PROFILE, chamber_profile
from .identifiers import SyntheticIds, last_path_segment, resolve_identifier
from .nodes import Node, NodeKind, TreeBuildError, TreeNode, XmlNode, build_tree
from .segmenter import DebateSegmenter, parse_debates, segment_debates

__all__ = [
    "CHAMBERS",
    "CHAMBER_PROFILES",
    "ChamberProfile",
    "DEFAULT_PROFILE",
    "DebateAccumulator",
    "DebateSegmenter",
    "Node",
    "NodeKind",
    "OrderedIdentifiers",
    "SyntheticIds",
    "TreeBuildError",
    "TreeNode",
    "XmlNode",
    "build_tree",
    "chamber_profile",
    "last_path_segment",
    "parse_debates",
    "resolve_identifier",
    "segment_debates",
]
