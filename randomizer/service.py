"""
Configuration Generator Service.

Fetches account and reference data from the Guild Wars 2 API under a shared
rate limit, resolves every selected character and assembles the weighted
randomizer configuration.
"""
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import httpx

from gw2api.fanout import gather_stages
from gw2api.fetcher import ResourceFetcher
from gw2api.rate_limiter import RateLimitedClient, RateLimiter

from .assembler import ConfigAssembler
from .catalog import ReferenceCatalog
from .config import GeneratorSettings, get_settings
from .documents import load_input, write_output
from .models import CharacterSelection, GeneratorInput, OutputDocument
from .options import OptionAggregator
from .resolver import CharacterProgressResolver
from .storylines import STORYLINES

logger = logging.getLogger(__name__)


class GeneratorService:
    """Runs the generation pipeline."""

    def __init__(
        self,
        settings: Optional[GeneratorSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        limiter=None
    ):
        """
        Args:
            settings: Generator settings (default: loaded from the environment)
            transport: httpx transport, for tests
            limiter: Shared rate limiter (default: built from settings)
        """
        self.settings = settings or get_settings()
        self.transport = transport
        self.limiter = limiter or RateLimiter(
            requests_per_minute=self.settings.requests_per_minute,
            max_jitter=self.settings.max_jitter_seconds
        )
        self.assembler = ConfigAssembler()

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            timeout=self.settings.request_timeout,
            transport=self.transport
        )

    @staticmethod
    def select_characters(
        generator_input: GeneratorInput,
        account_names: Iterable[str]
    ) -> Dict[str, CharacterSelection]:
        """
        Characters to generate options for, in output order.

        Only characters listed in the input are used; an empty selection
        produces a document without character options.
        """
        if not generator_input.characters:
            logger.warning(f"No characters selected, {len(set(account_names))} account characters ignored")
        return dict(generator_input.characters)

    async def build_document(self, generator_input: GeneratorInput) -> OutputDocument:
        """
        Fetch everything needed and build the output document.

        Args:
            generator_input: Access token and character selections

        Returns:
            OutputDocument with all character options merged in

        Raises:
            TransportError, SchemaError, CatalogError: the run cannot complete
        """
        async with self._http_client() as http:
            client = RateLimitedClient(http, self.limiter)
            fetcher = ResourceFetcher(
                client,
                generator_input.api_key,
                quest_batch_size=self.settings.quest_batch_size
            )

            logger.info("Fetching account characters")
            account_names = set(await fetcher.fetch_character_names())
            selections = self.select_characters(generator_input, account_names)
            selected_names = [name for name in selections if name in account_names]

            logger.info(
                f"Fetching {len(selected_names)} characters, "
                f"{len(STORYLINES)} seasons and the quest catalog"
            )
            characters, seasons, quests = await gather_stages(
                fetcher.fetch_characters(selected_names),
                fetcher.fetch_seasons(storyline.id for storyline in STORYLINES),
                fetcher.fetch_quest_catalog()
            )

            catalog = ReferenceCatalog.build(seasons.values(), quests.values())
            resolver = CharacterProgressResolver(fetcher, characters, catalog)
            progress = await resolver.resolve_all(selections)

        aggregator = OptionAggregator(resolver)
        character_options = aggregator.aggregate_all(selections, progress)
        return self.assembler.assemble(character_options)

    async def run(
        self,
        input_path: Union[str, Path, None] = None,
        output_path: Union[str, Path, None] = None
    ) -> OutputDocument:
        """
        Load the input, build the configuration and write it.

        Nothing is written unless every stage succeeded.
        """
        input_path = input_path or self.settings.input_file
        output_path = output_path or self.settings.output_file

        generator_input = load_input(input_path)
        document = await self.build_document(generator_input)
        write_output(document, output_path)
        return document
