"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when the first document is written. Use these constants so collection names
stay consistent and act as the single source of truth for the "schema".

Example:
    from cowconnect.infrastructure.firebase.client import get_firestore_client
    from cowconnect.infrastructure.firebase.collections import COLLECTION_POSTS

    db = get_firestore_client()
    if db:
        snap = await db.collection(COLLECTION_POSTS).document(post_id).get()
"""

from cowconnect.domain.enums import ProfileCollection

# Content
COLLECTION_POSTS = "posts"
COLLECTION_WORKSHOPS = "workshops"

# Profiles (owner index: workshops, posts; registrant index: registrations)
COLLECTION_EXPERTS = ProfileCollection.EXPERTS.value
COLLECTION_FARMERS = ProfileCollection.FARMERS.value

# Lookup order when the caller's role is unknown.
PROFILE_COLLECTIONS = (COLLECTION_EXPERTS, COLLECTION_FARMERS)

# Index fields on profile documents.
FIELD_POSTS_INDEX = "posts"
FIELD_WORKSHOPS_INDEX = "workshops"
FIELD_REGISTRATIONS_INDEX = "registrations"
