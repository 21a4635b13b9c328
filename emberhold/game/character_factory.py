"""
Starting attributes for newly created characters.

Derives the full character row from the three choices a player makes at
signup (name, sex, pronoun) plus the game's starting rules.
"""

from ..config.models import CharacterDefaultsConfig
from ..models.enums import PlayerPronoun, PlayerSex
from ..persistence.protocols import RegistrationRepositoryProtocol
from ..schemas.registration import CharacterCreatePayload, StarterTown
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class CharacterFactory:
    """Builds CharacterCreatePayload instances for signup."""

    def __init__(self, repository: RegistrationRepositoryProtocol, defaults: CharacterDefaultsConfig | None = None):
        self.repository = repository
        self.defaults = defaults or CharacterDefaultsConfig()

    def look_type_for(self, sex: PlayerSex) -> int:
        if sex == PlayerSex.MALE:
            return self.defaults.male_look_type
        return self.defaults.female_look_type

    def choose_town(self, towns: list[StarterTown]) -> StarterTown:
        """New characters start in the first available starter town."""
        if not towns:
            return StarterTown(id=self.defaults.default_town_id, name=self.defaults.default_town_name)
        return towns[0]

    async def generate_character_input(
        self, name: str, pronoun: PlayerPronoun, sex: PlayerSex
    ) -> CharacterCreatePayload:
        """
        Build the creation payload for a new character.

        Args:
            name: Validated character name, stored as given
            pronoun: Parsed pronoun choice
            sex: Parsed sex choice; selects the starting outfit

        Returns:
            CharacterCreatePayload ready for persistence
        """
        town = self.choose_town(await self.repository.get_starter_towns())
        defaults = self.defaults

        payload = CharacterCreatePayload(
            name=name,
            sex=sex,
            pronoun=pronoun,
            level=defaults.level,
            vocation=defaults.vocation,
            health=defaults.health,
            health_max=defaults.health,
            mana=defaults.mana,
            mana_max=defaults.mana,
            capacity=defaults.capacity,
            soul=defaults.soul,
            town_id=town.id,
            look_type=self.look_type_for(sex),
        )
        logger.debug("Character payload generated", character_name=name, town_id=town.id, sex=sex.name)
        return payload
