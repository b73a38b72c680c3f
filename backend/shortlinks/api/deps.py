from fastapi import Depends

from ..services.directory import LinkDirectory
from ..services.links import LinkService
from ..services.redirect import RedirectResolver

# Shared by every request; each directory call opens its own session
directory = LinkDirectory()


def get_directory() -> LinkDirectory:
    return directory


def get_link_service(directory: LinkDirectory = Depends(get_directory)) -> LinkService:
    return LinkService(directory)


def get_resolver(directory: LinkDirectory = Depends(get_directory)) -> RedirectResolver:
    return RedirectResolver(directory)
