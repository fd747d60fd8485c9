from .generators import StaticSuggestionGenerator, SuggestionGenerator, build_prompt
from .oembed import OEmbedVerifier, get_oembed_verifier
from .resolution import ReferenceResolver, resolve_references
from .sanitize import sanitize, sanitize_outcome
from .search_fallback import build_search_url
from .suggestions import parse_suggestions, safe_parse_json
from .types import (
    Availability,
    CandidateReference,
    Resolution,
    ResolvedReference,
    Sanitized,
    Unrecognized,
)

__all__ = [
    "Availability",
    "CandidateReference",
    "OEmbedVerifier",
    "ReferenceResolver",
    "Resolution",
    "ResolvedReference",
    "Sanitized",
    "StaticSuggestionGenerator",
    "SuggestionGenerator",
    "Unrecognized",
    "build_prompt",
    "build_search_url",
    "get_oembed_verifier",
    "parse_suggestions",
    "resolve_references",
    "safe_parse_json",
    "sanitize",
    "sanitize_outcome",
]
