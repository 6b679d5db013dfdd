"""
YAML input and output documents.
"""
import logging
from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from gw2api.errors import InputError

from .models import GeneratorInput, OutputDocument

logger = logging.getLogger(__name__)


def parse_input(text: str) -> GeneratorInput:
    """
    Parse an input document.
    
    Raises:
        InputError: Not YAML, or not a valid input document
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InputError(f"Input is not valid YAML: {e}") from e
    
    if not isinstance(data, dict):
        raise InputError("Input document must be a mapping")
    
    try:
        return GeneratorInput.model_validate(data)
    except ValidationError as e:
        raise InputError(f"Invalid input document: {e}") from e


def load_input(path: Union[str, Path]) -> GeneratorInput:
    """Load and validate the input document at path."""
    input_path = Path(path)
    if not input_path.exists():
        raise InputError(f"Input file {input_path} not found")
    
    with open(input_path, 'r', encoding='utf-8') as f:
        generator_input = parse_input(f.read())
    
    logger.info(f"Loaded {len(generator_input.characters)} character selections from {input_path}")
    return generator_input


def dump_output(document: OutputDocument) -> str:
    """Render the output document as YAML, keys in declaration order."""
    return yaml.safe_dump(
        document.to_data(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True
    )


def write_output(document: OutputDocument, path: Union[str, Path]) -> Path:
    """Render the document completely, then write it to path."""
    output_path = Path(path)
    text = dump_output(document)
    
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(text)
    
    logger.info(f"Wrote configuration to {output_path}")
    return output_path
