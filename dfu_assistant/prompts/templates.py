"""
Template name constants.

Pure constants - no I/O or file system knowledge.
"""


class Template:
    """Template name constants. Use these instead of raw strings."""

    # Wizard replies
    OVERVIEW = "overview"
    PLATFORM_REQUIRED = "platform_required"
    BEGIN_INTEGRATION = "begin_integration"
    VARIANT_SELECTION = "variant_selection"
    VARIANT_SELECTED = "variant_selected"
    MEMORY_PROMPT = "memory_prompt"
    DATASET_PROMPT = "dataset_prompt"
    ALTERNATIVE_PROMPT = "alternative_prompt"
    GENERATION_STARTED = "generation_started"
    INTEGRATION_COMPLETE = "integration_complete"

    # Stateless directives
    INSPECT_REPORT = "inspect_report"
    WRAP_FUNCTION = "wrap_function"

    # Code-generation oracle
    GENERATION_REQUEST = "generation_request"
    ORACLE_UNAVAILABLE = "oracle_unavailable"
