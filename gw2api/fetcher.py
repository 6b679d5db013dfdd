"""
Typed fetchers for the Guild Wars 2 API resources the generator needs.

Single requests return validated models; the plural fetchers fan out one
request per item through gather_keyed and only return once every request of
the stage has resolved.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from .errors import SchemaError, TransportError
from .fanout import gather_keyed
from .rate_limiter import RateLimitedClient
from .schemas import Quest, RemoteCharacter, Season

logger = logging.getLogger(__name__)

_NAMES = TypeAdapter(List[str])
_IDS = TypeAdapter(List[int])
_ID_SET = TypeAdapter(Set[int])
_CHARACTER = TypeAdapter(RemoteCharacter)
_SEASON = TypeAdapter(Season)
_QUESTS = TypeAdapter(List[Quest])


def chunked(items: List[Any], size: int) -> List[List[Any]]:
    """Split a list into consecutive chunks of at most size items."""
    if size <= 0:
        raise ValueError("chunk size must be positive")
    return [items[i:i + size] for i in range(0, len(items), size)]


class ResourceFetcher:
    """Fetches and validates API resources through a rate limited client."""

    def __init__(self, client: RateLimitedClient, access_token: str, quest_batch_size: int = 100):
        self.client = client
        self.access_token = access_token
        self.quest_batch_size = quest_batch_size

    async def _get(self, path: str, adapter: TypeAdapter, params: Optional[Dict[str, Any]] = None, authenticated: bool = False):
        """
        Send one GET request and validate its JSON body.

        Args:
            path: Endpoint path relative to the API base URL
            adapter: Validator for the expected response shape
            params: Query parameters
            authenticated: Attach the access token

        Returns:
            The validated response

        Raises:
            TransportError: Network failure or non-success status
            SchemaError: Body is not JSON or does not match the expected shape
        """
        params = dict(params or {})
        if authenticated:
            params["access_token"] = self.access_token

        logger.debug(f"GET {path}")
        # Error messages name the path only; the full URL carries the token
        try:
            response = await self.client.get(path, params=params or None)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            reason = f"HTTP {e.response.status_code}"
            logger.error(f"Request to {path} failed: {reason}")
            raise TransportError(path, reason) from e
        except httpx.HTTPError as e:
            reason = type(e).__name__
            logger.error(f"Request to {path} failed: {reason}")
            raise TransportError(path, reason) from e

        try:
            return adapter.validate_python(response.json())
        except ValueError as e:
            logger.error(f"Could not decode response from {path}: {e}")
            raise SchemaError(path, str(e)) from e

    async def fetch_character_names(self) -> List[str]:
        """Fetch the names of every character on the account."""
        return await self._get("/characters", _NAMES, authenticated=True)

    async def fetch_character(self, name: str) -> RemoteCharacter:
        """Fetch the core record (name, race, profession) of one character."""
        return await self._get(f"/characters/{quote(name, safe='')}/core", _CHARACTER, authenticated=True)

    async def fetch_characters(self, names: Iterable[str]) -> Dict[str, RemoteCharacter]:
        """Fetch core records for several characters, keyed by name."""
        characters = await gather_keyed(
            (self.fetch_character(name) for name in names),
            key=lambda character: character.name
        )
        logger.info(f"Fetched {len(characters)} character records")
        return characters

    async def fetch_season(self, season_id: str) -> Season:
        """Fetch one story season."""
        return await self._get(f"/stories/seasons/{season_id}", _SEASON)

    async def fetch_seasons(self, season_ids: Iterable[str]) -> Dict[str, Season]:
        """Fetch several story seasons, keyed by season id."""
        seasons = await gather_keyed(
            (self.fetch_season(season_id) for season_id in season_ids),
            key=lambda season: season.id
        )
        logger.info(f"Fetched {len(seasons)} seasons")
        return seasons

    async def fetch_quest_ids(self) -> List[int]:
        """Fetch the id of every quest in the game."""
        return await self._get("/quests", _IDS)

    async def fetch_quest_batch(self, quest_ids: List[int]) -> List[Quest]:
        """Fetch details for one batch of quest ids."""
        ids = ",".join(str(quest_id) for quest_id in quest_ids)
        return await self._get("/quests", _QUESTS, params={"ids": ids})

    async def fetch_quests(self, quest_ids: List[int]) -> Dict[int, Quest]:
        """Fetch details for every given quest id in batches, keyed by quest id."""
        batches = chunked(list(quest_ids), self.quest_batch_size)
        logger.debug(f"Fetching {len(quest_ids)} quests in {len(batches)} batches")

        quests = await gather_keyed(
            (self.fetch_quest_batch(batch) for batch in batches),
            key=lambda quest: quest.id,
            many=True
        )
        logger.info(f"Fetched {len(quests)} quests")
        return quests

    async def fetch_quest_catalog(self) -> Dict[int, Quest]:
        """Fetch the quest id list and then the details of every quest."""
        return await self.fetch_quests(await self.fetch_quest_ids())

    async def fetch_completed_quests(self, name: str) -> Set[int]:
        """Fetch the ids of the quests a character has completed."""
        return await self._get(f"/characters/{quote(name, safe='')}/quests", _ID_SET, authenticated=True)

    async def _completed_for(self, name: str) -> Tuple[str, Set[int]]:
        return name, await self.fetch_completed_quests(name)

    async def fetch_completed_quests_for(self, names: Iterable[str]) -> Dict[str, Set[int]]:
        """Fetch completed quest ids for several characters, keyed by name."""
        return await gather_keyed(
            (self._completed_for(name) for name in names),
            key=lambda pair: pair[0],
            value=lambda pair: pair[1]
        )
