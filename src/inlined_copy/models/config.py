"""Configuration models for reference expansion."""

from pydantic import BaseModel, ConfigDict, Field


class ExpansionConfig(BaseModel):
    """Limits and switches applied to one expansion run.

    Every field is optional so partially filled configs (CLI flags, project
    file, user file) can be layered; :class:`ConfigLoader` fills the gaps
    from environment variables and built-in defaults.

    Attributes:
        max_file_size: Largest file, in bytes, that may be inlined
        max_recursion_depth: Levels of nested references that are expanded
        process_parameters: Prompt for ``{{name}}`` placeholders after expansion
        cache_enabled: Reuse file contents while their modification time
            is unchanged
    """

    model_config = ConfigDict(extra="forbid")

    max_file_size: int | None = Field(
        None, gt=0, description="Maximum size in bytes of an included file"
    )
    max_recursion_depth: int | None = Field(
        None, ge=0, description="Maximum depth of nested reference expansion"
    )
    process_parameters: bool | None = Field(
        None, description="Substitute {{name}} placeholders after expansion"
    )
    cache_enabled: bool | None = Field(
        None, description="Cache file contents keyed by path and mtime"
    )


class ProjectConfig(BaseModel):
    """Contents of a project or user configuration file."""

    model_config = ConfigDict(extra="forbid")

    expansion: ExpansionConfig | None = Field(
        None, description="Expansion limits and switches"
    )
