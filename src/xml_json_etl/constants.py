"""Central constants for the xml_json_etl project."""

# JSON files are written without a BOM; most JSON consumers reject one.
JSON_ENCODING = "utf-8"
JSON_INDENT = 2

# Key used for a text node converted on its own (i.e. next to attributes or
# child elements instead of being collapsed into its parent).
TEXT_KEY = "value"

# xsi:schemaLocation carries no document data.
DEFAULT_IGNORED_ATTRIBUTES = ("schemaLocation",)

XML_SUFFIX = ".xml"
JSON_SUFFIX = ".json"
