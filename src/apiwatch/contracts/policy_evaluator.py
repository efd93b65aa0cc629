"""Provider whitelist policy for validated image assets."""

import logging
from typing import FrozenSet, Iterable, Union

from apiwatch.exceptions import ConfigurationError
from apiwatch.models.asset_models import ImageAsset, ImageProvider

logger = logging.getLogger(__name__)

# Schema-valid providers are a superset of these; midjourney validates but
# is not authorized.
AUTHORIZED_PROVIDERS: FrozenSet[ImageProvider] = frozenset(
    {ImageProvider.OPENAI, ImageProvider.STABILITY_AI}
)


def is_authorized(
    asset: ImageAsset,
    authorized: Iterable[ImageProvider] = AUTHORIZED_PROVIDERS,
) -> bool:
    """Return True if the asset came from an authorized provider."""
    return asset.provider in frozenset(authorized)


class PolicyEvaluator:
    """Evaluate validated assets against a fixed authorized-provider set.

    The verdict is recomputed on every call and never cached.
    """

    def __init__(
        self,
        authorized: Iterable[Union[ImageProvider, str]] = AUTHORIZED_PROVIDERS,
    ):
        """Initialize the evaluator.

        Args:
            authorized: Provider tags allowed by policy

        Raises:
            ConfigurationError: If a tag is not a known provider
        """
        providers = set()
        for tag in authorized:
            try:
                providers.add(ImageProvider(tag))
            except ValueError as e:
                raise ConfigurationError(f"Unknown provider in whitelist: {tag!r}") from e
        self.authorized: FrozenSet[ImageProvider] = frozenset(providers)

    def is_authorized(self, asset: ImageAsset) -> bool:
        """Return True if the asset's provider is in the authorized set.

        Args:
            asset: A validated asset; raw payloads must go through the
                schema validator first

        Returns:
            Authorization verdict
        """
        verdict = is_authorized(asset, self.authorized)
        logger.debug(
            f"Provider {asset.provider.value} for asset {asset.id}: "
            f"{'authorized' if verdict else 'unauthorized'}"
        )
        return verdict
