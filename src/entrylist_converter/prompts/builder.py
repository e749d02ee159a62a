"""Prompt and response schema builder for entry list extraction."""

from typing import Any

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from entrylist_converter.schemas.entry import CompetitionEntry

# Python types the response schema can express
_SCHEMA_TYPES: dict[Any, str] = {
    str: "STRING",
    int: "INTEGER",
    float: "NUMBER",
    bool: "BOOLEAN",
}


class PromptBuilder:
    """Builds the extraction request from a Pydantic record schema."""

    DEFAULT_SYSTEM_PROMPT = (
        "You are an expert data extraction assistant. "
        "Your task is to read scanned competition entry lists and transcribe "
        "every entry accurately.\n\n"
        "Rules:\n"
        "1. Extract only entries that are explicitly present in the document\n"
        "2. Keep the order in which entries appear in the document\n"
        "3. Copy names exactly as printed, including accented characters\n"
        "4. Copy the height or class text as printed, with its unit\n"
        "5. Use an empty string for a value that is missing on the list\n"
        "6. Do not infer or make up entries that are not in the document"
    )

    def __init__(self, include_field_descriptions: bool = True) -> None:
        """Initialize the prompt builder.

        Args:
            include_field_descriptions: Whether to include field descriptions in prompts
        """
        self.include_field_descriptions = include_field_descriptions

    def build_system_prompt(self, custom_prompt: str | None = None) -> str:
        """Build the system prompt.

        Args:
            custom_prompt: Optional custom system prompt to use instead of default

        Returns:
            The system prompt string
        """
        return custom_prompt or self.DEFAULT_SYSTEM_PROMPT

    def build_extraction_prompt(self, schema: type[BaseModel] = CompetitionEntry) -> str:
        """Build the user prompt that accompanies the attached document.

        Args:
            schema: The Pydantic model describing one record

        Returns:
            The formatted extraction prompt
        """
        parts: list[str] = []

        schema_desc = self._describe_schema(schema)
        parts.append(f"## Record Schema\n\n{schema_desc}")

        field_names = ", ".join(_wire_name(name, info) for name, info in schema.model_fields.items())
        parts.append(
            "## Task\n\n"
            "Extract every entry from the attached PDF document. "
            f"Return a JSON array in which each element is an object with exactly the keys "
            f"{field_names}. All values are strings. "
            "Return only the array, with no commentary."
        )

        return "\n\n".join(parts)

    def build_response_schema(self, schema: type[BaseModel] = CompetitionEntry) -> dict[str, Any]:
        """Build the strict output schema sent with the request.

        The schema describes an array of records keyed by wire name. Every
        field of ``schema`` is required.

        Args:
            schema: The Pydantic model describing one record

        Returns:
            Response schema in the inference service's OpenAPI subset
        """
        properties: dict[str, Any] = {}
        ordering: list[str] = []

        for name, field_info in schema.model_fields.items():
            key = _wire_name(name, field_info)
            prop: dict[str, Any] = {"type": _SCHEMA_TYPES.get(field_info.annotation, "STRING")}
            if self.include_field_descriptions and field_info.description:
                prop["description"] = field_info.description
            properties[key] = prop
            ordering.append(key)

        return {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": properties,
                "required": list(ordering),
                "propertyOrdering": ordering,
            },
        }

    def _describe_schema(self, schema: type[BaseModel]) -> str:
        """Generate a human-readable description of the record schema."""
        lines: list[str] = [f"**{schema.__name__}**"]

        if schema.__doc__:
            summary = schema.__doc__.strip().splitlines()[0]
            lines.append(f"\n{summary}")

        lines.append("\nFields:")
        for field_name, field_info in schema.model_fields.items():
            lines.append(self._describe_field(field_name, field_info))

        return "\n".join(lines)

    def _describe_field(self, name: str, field_info: FieldInfo) -> str:
        """Describe a single field.

        Args:
            name: Python field name
            field_info: Pydantic FieldInfo object

        Returns:
            Formatted field description
        """
        key = _wire_name(name, field_info)
        type_str = _SCHEMA_TYPES.get(field_info.annotation, "STRING").lower()
        required_str = "required" if field_info.is_required() else "optional"

        parts = [f"- **{key}** ({type_str}, {required_str})"]
        if self.include_field_descriptions and field_info.description:
            parts.append(f": {field_info.description}")

        return "".join(parts)


def _wire_name(name: str, field_info: FieldInfo) -> str:
    return field_info.alias or name
