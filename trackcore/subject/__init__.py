"""Subject context for the tracker.

Provides:
- Subject: user/device attributes and their standard, platform and geolocation payloads
- SubjectController: lock-guarded owner of a Subject for multi-threaded callers
- SubjectConfiguration: flags and field defaults used to build a Subject
"""
from trackcore.subject.controller import SubjectController, SubjectPayloads
from trackcore.subject.exceptions import InvalidArgument, SubjectError
from trackcore.subject.models import PlatformContextProperty, Size, SubjectConfiguration
from trackcore.subject.payload import Payload
from trackcore.subject.subject import Subject

__all__ = [
    "InvalidArgument",
    "Payload",
    "PlatformContextProperty",
    "Size",
    "Subject",
    "SubjectConfiguration",
    "SubjectController",
    "SubjectError",
    "SubjectPayloads",
]
