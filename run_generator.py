#!/usr/bin/env python3
"""
Runner for the Guild Wars 2 randomizer configuration generator.

Reads the input document, queries the Guild Wars 2 API and writes the
generated configuration. File locations come from settings (GW2_INPUT_FILE,
GW2_OUTPUT_FILE or a .env file).
"""
import asyncio
import logging
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from gw2api.errors import GeneratorError, InputError, SchemaError, TransportError
from randomizer.config import get_settings
from randomizer.service import GeneratorService

logger = logging.getLogger("run_generator")


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    # httpx logs full request URLs, which include the access token
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger.info(f"Input: {settings.input_file}")
    logger.info(f"Output: {settings.output_file}")
    logger.info(f"API: {settings.api_base_url} ({settings.requests_per_minute} requests/min)")

    try:
        asyncio.run(GeneratorService(settings).run())
    except InputError as e:
        logger.error(f"Invalid input: {e}")
        return 2
    except TransportError as e:
        logger.error(f"API request failed: {e}")
        return 1
    except SchemaError as e:
        logger.error(f"API returned unexpected data: {e}")
        return 1
    except GeneratorError as e:
        logger.error(f"Generation failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
