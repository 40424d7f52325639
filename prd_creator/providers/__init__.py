from prd_creator.providers.base import AIProvider, ProviderId, ProviderKind
from prd_creator.providers.manager import ProviderManager, create_provider

__all__ = ["AIProvider", "ProviderId", "ProviderKind", "ProviderManager", "create_provider"]
