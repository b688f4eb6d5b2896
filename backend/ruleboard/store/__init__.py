# Flat-file persistence: one JSON document per view, one per collection

from ruleboard.store.files import ROOT_VIEW_ID, sanitize_view_id
from ruleboard.store.views import ViewStore
from ruleboard.store.collections import CollectionStore
from ruleboard.store.remote import RemoteViewStore

__all__ = [
    "ROOT_VIEW_ID",
    "sanitize_view_id",
    "ViewStore",
    "CollectionStore",
    "RemoteViewStore",
]
