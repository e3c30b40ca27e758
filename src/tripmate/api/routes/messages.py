"""Contact message endpoints.

Messages are only created by the public contact form, so there is no admin
create route here.
"""

from .lifecycle import build_lifecycle_router

router = build_lifecycle_router("contactMessages")
