"""Configuration management for the binding generator."""

from pathlib import Path
from typing import List, Optional
import yaml
from pydantic import BaseModel, Field, field_validator

from ffisymbols.resolution.mapper import POLICIES


OUTPUT_FORMATS = ("ruby", "json")

# Ruby keywords and FFI::Library methods that cannot be used as function names
DEFAULT_KEYWORD_BLACKLIST = [
    "alias", "and", "begin", "break", "case", "class", "def", "defined?", "do",
    "else", "elsif", "end", "ensure", "false", "for", "if", "in", "module",
    "next", "nil", "not", "or", "redo", "rescue", "retry", "return", "self",
    "super", "then", "true", "undef", "unless", "until", "when", "while",
    "yield", "callback", "attach_function", "enum", "typedef", "ffi_lib",
]


class NamingConfig(BaseModel):
    """Symbol naming policy."""

    policy: str = "override"  # identity, override, prefix, override+prefix
    prefix: str = ""
    on_invalid_override: str = "abort"  # abort, skip

    @field_validator("policy")
    @classmethod
    def check_policy(cls, value: str) -> str:
        if value not in POLICIES:
            raise ValueError(f"policy must be one of {', '.join(POLICIES)}")
        return value

    @field_validator("on_invalid_override")
    @classmethod
    def check_on_invalid_override(cls, value: str) -> str:
        if value not in ("abort", "skip"):
            raise ValueError("on_invalid_override must be 'abort' or 'skip'")
        return value


class PerformanceConfig(BaseModel):
    """Performance settings."""

    parallel_workers: int = 1


class GeneratorConfig(BaseModel):
    """Main generator configuration."""

    module_name: Optional[str] = None
    ffi_lib: Optional[str] = None
    headers: List[str] = Field(default_factory=list)
    prefixes: List[str] = Field(default_factory=list)
    blocking: List[str] = Field(default_factory=list)
    export_macros: List[str] = Field(default_factory=list)
    ffi_lib_flags: List[str] = Field(default_factory=list)
    output: Optional[str] = None
    output_format: str = "ruby"
    keyword_blacklist: List[str] = Field(default_factory=lambda: list(DEFAULT_KEYWORD_BLACKLIST))

    naming: NamingConfig = Field(default_factory=NamingConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)

    rule_files: List[str] = Field(default_factory=list)

    @field_validator("output_format")
    @classmethod
    def check_output_format(cls, value: str) -> str:
        if value not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
        return value

    @classmethod
    def load_from_file(cls, config_path: Path) -> "GeneratorConfig":
        """Load configuration from YAML file."""
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def load_default(cls) -> "GeneratorConfig":
        """Load default configuration."""
        return cls()

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)


def load_config(config_path: Optional[str] = None) -> GeneratorConfig:
    """Load configuration from file or defaults."""
    if config_path:
        return GeneratorConfig.load_from_file(Path(config_path))

    # Try to find config in standard locations
    standard_paths = [
        Path("ffi_symbols.yaml"),
        Path("config/ffi_symbols.yaml"),
        Path.home() / ".ffi_symbols" / "config.yaml"
    ]

    for path in standard_paths:
        if path.exists():
            return GeneratorConfig.load_from_file(path)

    return GeneratorConfig.load_default()
