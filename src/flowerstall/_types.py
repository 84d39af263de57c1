"""Shared type definitions for flowerstall."""

from typing import Literal

# How URL paths map to documents, fixed at startup
type PreviewMode = Literal["document", "directory"]

# URL path as received from the client (may carry query and escapes)
type UrlPath = str

# Reload subscription lifecycle
type SubscriptionState = Literal["connecting", "open", "closed"]

# Kind of filesystem change reported by the watcher
type ChangeKind = Literal["created", "modified", "deleted"]
