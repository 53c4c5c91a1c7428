"""Forensic DNA: a BST of STR profiles matched against unknown evidence sequences."""

from __future__ import annotations

__version__ = "0.1.0"

# Core data model and tree
from .profile import Profile, STRMarker, required_matches
from .evidence import EvidenceContext, count_occurrences
from .tree import DuplicatePolicy, ProfileStore, TreeNode

# Loading and configuration
from .loader import LoadRecord, ProfileDatabase, build_store, parse_database, read_database
from .config import AnalysisConfig, load_config, dump_config

# Reporting
from .reporting import profiles_frame, markers_frame, summary, write_report

__all__ = [
    "__version__",
    # Core
    "Profile",
    "STRMarker",
    "required_matches",
    "EvidenceContext",
    "count_occurrences",
    "DuplicatePolicy",
    "ProfileStore",
    "TreeNode",
    # Loading
    "LoadRecord",
    "ProfileDatabase",
    "build_store",
    "parse_database",
    "read_database",
    # Configuration
    "AnalysisConfig",
    "load_config",
    "dump_config",
    # Reporting
    "profiles_frame",
    "markers_frame",
    "summary",
    "write_report",
]
