"""Tag syntax constants.

The annotation contract is fixed: rule names live under the ``valid`` key,
separated by ``;``, and ``-`` switches validation off for a field.
"""

# Metadata key holding the rule spec of a field
TAG_KEY = "valid"

# Separator between rule names: "required;email"
RULE_SEPARATOR = ";"

# Sentinel meaning "do not validate this field"
IGNORE_SENTINEL = "-"

# Rule checked first for every field, against the value itself
REQUIRED_KEY = "required"

# Field name used for record-level failures
OBJECT_FIELD = "Object"

# Default nesting limit for recursive descent
DEFAULT_MAX_DEPTH = 64

# Configuration file searched for by the loader
CONFIG_FILENAME = ".tagvalid.json"
