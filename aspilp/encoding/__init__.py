"""Encoding of learning problems into ASP text.

- Model: sectioned, deduplicated statement container with canonical rendering
- DirectiveEncoder: examples and head modes -> objectives, choices, bridging rules
- ClauseEncoder: clause candidates -> literal-selection sub-programs
- EncodingWriter: rendered text -> working directory files
"""

from aspilp.encoding.model import SECTION_ORDER, Model, Section
from aspilp.encoding.directives import (
    FILTERS,
    TAG_ABDUCE,
    TAG_TYPE,
    DecodedHead,
    DirectiveEncoder,
    decode_head,
)
from aspilp.encoding.clauses import (
    SELECTION_RULES,
    ClauseCandidate,
    ClauseEncoder,
    ClauseHead,
    ClauseLiteral,
    encode_generalisation,
)
from aspilp.encoding.writer import DEFAULT_WORK_DIR, EncodingWriter

__all__ = [
    # Model
    "Model",
    "Section",
    "SECTION_ORDER",
    # Directives
    "DirectiveEncoder",
    "DecodedHead",
    "decode_head",
    "FILTERS",
    "TAG_ABDUCE",
    "TAG_TYPE",
    # Clauses
    "ClauseCandidate",
    "ClauseEncoder",
    "ClauseHead",
    "ClauseLiteral",
    "SELECTION_RULES",
    "encode_generalisation",
    # Output
    "EncodingWriter",
    "DEFAULT_WORK_DIR",
]
