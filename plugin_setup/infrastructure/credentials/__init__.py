from plugin_setup.infrastructure.credentials.provider_validators import ProviderCredentialValidator

__all__ = ["ProviderCredentialValidator"]
