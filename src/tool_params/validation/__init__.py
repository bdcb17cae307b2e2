from tool_params.validation.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_VULN_STATUSES,
    MAX_PAGE_SIZE,
    MIN_PAGE,
    SORT_PATTERN,
    VALID_VULN_STATUSES,
)
from tool_params.validation.context import ToolValidationContext
from tool_params.validation.metadata_filter import (
    MetadataJsonFilterSpec,
    UnresolvedMetadataFilter,
    classify_filter_value,
)
from tool_params.validation.parsing import (
    ParseResult,
    parse_comma_separated,
    parse_date,
)
from tool_params.validation.specs import (
    DateSpec,
    EnumSetSpec,
    IntSpec,
    ParamSpec,
    StringListSpec,
    StringSpec,
)

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_VULN_STATUSES",
    "MAX_PAGE_SIZE",
    "MIN_PAGE",
    "SORT_PATTERN",
    "VALID_VULN_STATUSES",
    "DateSpec",
    "EnumSetSpec",
    "IntSpec",
    "MetadataJsonFilterSpec",
    "ParamSpec",
    "ParseResult",
    "StringListSpec",
    "StringSpec",
    "ToolValidationContext",
    "UnresolvedMetadataFilter",
    "classify_filter_value",
    "parse_comma_separated",
    "parse_date",
]
