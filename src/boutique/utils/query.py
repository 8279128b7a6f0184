"""Helpers for reading whole collections through Protean querysets.

Protean querysets are paginated, so reading "everything" means walking the
pages until a short one comes back.
"""

BATCH_SIZE = 500


def fetch_all(queryset, batch_size=BATCH_SIZE):
    items = []
    offset = 0
    while True:
        batch = queryset.offset(offset).limit(batch_size).all().items
        items.extend(batch)
        if len(batch) < batch_size:
            return items
        offset += batch_size
