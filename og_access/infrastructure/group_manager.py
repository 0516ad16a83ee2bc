"""In-memory registry of group bundles, group content bundles and audiences"""

from typing import Dict, Iterable, List, Optional, Set, Tuple

from og_access.core.config import Settings, get_settings
from og_access.core.exceptions import ConfigurationError
from og_access.core.models import Entity
from og_access.infrastructure.logging import get_logger

logger = get_logger(__name__)

BundleKey = Tuple[str, str]
EntityKey = Tuple[str, str]


class GroupManager:
    """Knows which bundles are groups and which entities belong to which groups"""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self._group_bundles: Dict[str, List[str]] = {}
        # Group content bundle -> group bundles it may be posted in
        self._group_content_bundles: Dict[BundleKey, Set[BundleKey]] = {}
        # Group content entity -> groups, in insertion order
        self._audience: Dict[EntityKey, List[Entity]] = {}

        for entity_type_id, bundles in settings.groups.items():
            for bundle in bundles:
                self.add_group(entity_type_id, bundle)

    @staticmethod
    def _entity_key(entity: Entity) -> EntityKey:
        return (entity.entity_type_id, str(entity.id))

    def is_group(self, entity_type_id: str, bundle: str) -> bool:
        return bundle in self._group_bundles.get(entity_type_id, [])

    def is_group_content(self, entity_type_id: str, bundle: str) -> bool:
        return (entity_type_id, bundle) in self._group_content_bundles

    def get_all_group_bundles(self, entity_type_id: Optional[str] = None) -> Dict[str, List[str]]:
        if entity_type_id is not None:
            return {entity_type_id: list(self._group_bundles.get(entity_type_id, []))}
        return {key: list(bundles) for key, bundles in self._group_bundles.items()}

    def add_group(self, entity_type_id: str, bundle: str) -> None:
        """Declare a bundle as a group"""
        bundles = self._group_bundles.setdefault(entity_type_id, [])
        if bundle not in bundles:
            bundles.append(bundle)
            logger.info("group_bundle_added", entity_type=entity_type_id, bundle=bundle)

    def remove_group(self, entity_type_id: str, bundle: str) -> None:
        """Stop treating a bundle as a group"""
        bundles = self._group_bundles.get(entity_type_id, [])
        if bundle in bundles:
            bundles.remove(bundle)
            if not bundles:
                del self._group_bundles[entity_type_id]
            logger.info("group_bundle_removed", entity_type=entity_type_id, bundle=bundle)

    def add_group_content_bundle(
        self,
        entity_type_id: str,
        bundle: str,
        target_bundles: Iterable[BundleKey] = (),
    ) -> None:
        """
        Declare a bundle as group content.

        Args:
            entity_type_id: Entity type of the content
            bundle: Bundle of the content
            target_bundles: (entity type, bundle) pairs of the groups the content
                may belong to, empty to allow every group

        Raises:
            ConfigurationError: If a target bundle is not a group
        """
        targets = set()
        for target_type, target_bundle in target_bundles:
            if not self.is_group(target_type, target_bundle):
                raise ConfigurationError(
                    f"{target_type}:{target_bundle} is not a group",
                    {"entity_type": entity_type_id, "bundle": bundle},
                )
            targets.add((target_type, target_bundle))

        self._group_content_bundles[(entity_type_id, bundle)] = targets
        logger.info(
            "group_content_bundle_added",
            entity_type=entity_type_id,
            bundle=bundle,
            targets=sorted(f"{t}:{b}" for t, b in targets),
        )

    def set_audience(self, entity: Entity, groups: Iterable[Entity]) -> None:
        """
        Set the groups a group content entity belongs to.

        Raises:
            ConfigurationError: If the entity is not group content, or a group
                is not allowed as a target of its bundle
        """
        content_key = (entity.entity_type_id, entity.bundle)
        if content_key not in self._group_content_bundles:
            raise ConfigurationError(
                f"{entity.entity_type_id}:{entity.bundle} is not group content"
            )

        targets = self._group_content_bundles[content_key]
        groups = list(groups)
        for group in groups:
            group_key = (group.entity_type_id, group.bundle)
            if not self.is_group(*group_key) or (targets and group_key not in targets):
                raise ConfigurationError(
                    f"{entity.entity_type_id}:{entity.id} cannot belong to "
                    f"{group.entity_type_id}:{group.id}"
                )

        self._audience[self._entity_key(entity)] = groups

    def get_groups(self, entity: Entity) -> Dict[str, List[Entity]]:
        """Get the groups of an entity, keyed by group entity type"""
        groups: Dict[str, List[Entity]] = {}
        for group in self._audience.get(self._entity_key(entity), []):
            groups.setdefault(group.entity_type_id, []).append(group)
        return groups
