"""
Output document assembly.
"""
import logging
from typing import Iterable, Optional

from .models import OutputDocument
from .options import CharacterOptions

logger = logging.getLogger(__name__)


class ConfigAssembler:
    """Merges per-character options into the output document."""
    
    def assemble(
        self,
        characters: Iterable[CharacterOptions],
        document: Optional[OutputDocument] = None
    ) -> OutputDocument:
        """
        Merge character weights and triggers into a document.
        
        Args:
            characters: Per-character options, in output order
            document: Document to extend (default: a fresh default document)
            
        Returns:
            The extended document
        """
        document = document or OutputDocument()
        game_options = document.game_options
        
        for character in characters:
            game_options.character[character.name] = character.weight
            game_options.triggers.extend(character.triggers)
        
        logger.info(
            f"Assembled {len(game_options.character)} characters, "
            f"{len(game_options.triggers)} triggers"
        )
        return document
