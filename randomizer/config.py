"""
Configuration management for the configuration generator.
"""
from gw2api.config import ApiSettings


class GeneratorSettings(ApiSettings):
    """Generator settings loaded from environment variables."""
    
    # Fixed file names unless overridden
    input_file: str = "input.yaml"
    output_file: str = "gw2.yaml"
    
    log_level: str = "INFO"


def get_settings() -> GeneratorSettings:
    """Get application settings instance."""
    return GeneratorSettings()
