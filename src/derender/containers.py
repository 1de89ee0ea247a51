"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from derender.adapters.gemini_image_client import GeminiImageClient
from derender.adapters.openai_image_client import OpenAIImageClient
from derender.adapters.supabase_document_store import SupabaseDocumentStore
from derender.adapters.supabase_object_store import SupabaseObjectStore
from derender.config import Settings
from derender.services.generation import GenerationService, ImageModelClient
from derender.services.sync import SessionSyncService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    generation_service: GenerationService
    sync_service: SessionSyncService
    close_resources: Callable[[], Awaitable[None]]


def build_image_client(settings: Settings) -> ImageModelClient | None:
    """Create the configured image model client, if it has a credential."""
    api_key = settings.model_api_key()
    if not api_key:
        return None
    if settings.image_provider == "openai":
        return OpenAIImageClient.create(api_key)
    return GeminiImageClient.create(api_key)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    object_store = SupabaseObjectStore(
        client=supabase_client,
        bucket=resolved_settings.storage_bucket,
        public_base_url=resolved_settings.resolved_public_base_url(),
    )
    document_store = SupabaseDocumentStore(supabase_client)
    image_client = build_image_client(resolved_settings)
    generation_service = GenerationService(
        client=image_client,
        object_store=object_store,
        document_store=document_store,
        model=resolved_settings.model_id(),
        credential_name=resolved_settings.model_api_key_name(),
    )
    sync_service = SessionSyncService(
        object_store=object_store,
        document_store=document_store,
        model=resolved_settings.model_id(),
    )

    async def close_resources() -> None:
        if image_client is not None:
            await image_client.close()

    return AppContainer(
        settings=resolved_settings,
        generation_service=generation_service,
        sync_service=sync_service,
        close_resources=close_resources,
    )
