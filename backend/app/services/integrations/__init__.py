from app.services.integrations.base import (
    ExternalEntityGateway,
    IntegrationSyncResult,
    ProviderClient,
)
from app.services.integrations.boukak import BoukakClient
from app.services.integrations.identity import IdentityClient
from app.services.integrations.loyalpro import LoyalProClient
from app.services.integrations.sadeq import SadeqClient
from app.services.integrations.tamara import TamaraClient
from app.services.integrations.unifonic import UnifonicClient
from app.services.integrations.vom import VomCatalogGateway, VomClient

__all__ = [
    "BoukakClient",
    "ExternalEntityGateway",
    "IdentityClient",
    "IntegrationSyncResult",
    "LoyalProClient",
    "ProviderClient",
    "SadeqClient",
    "TamaraClient",
    "UnifonicClient",
    "VomCatalogGateway",
    "VomClient",
]
