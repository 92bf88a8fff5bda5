"""Store adapter de galería"""
from shared.database.models import Gallery
from services.event_management.stores.base import EventChildStore


class GalleryStore(EventChildStore[Gallery]):
    model = Gallery
