"""Image reference parsing."""

from ..models.image import ImageIdentity


class ClientInputError(Exception):
    """User-correctable problem with the submitted image reference."""

    pass


class InvalidReference(ClientInputError):
    """The reference cannot be split into repository and digest."""

    pass


def _strip_prefix(value: str, prefix: str) -> str:
    return value[len(prefix):] if value.startswith(prefix) else value


def parse_image_reference(ref: str) -> ImageIdentity:
    """
    Split an image reference into repository and content digest.

    Accepts ``gcr.io/p/app@sha256:<hex>`` optionally prefixed with
    ``https://``/``http://`` and optionally followed by ``/``. The digest is
    passed through verbatim.

    Raises:
        InvalidReference: no ``@`` separator, or an empty side.
    """
    value = _strip_prefix(ref, "https://")
    value = _strip_prefix(value, "http://")
    if value.endswith("/"):
        value = value[:-1]

    parts = value.split("@", 1)
    if len(parts) < 2:
        raise InvalidReference("invalid image ID: missing '@' digest separator")

    repository, digest = parts[0].strip("/"), parts[1].strip("/")
    if not repository or not digest:
        raise InvalidReference("invalid image ID: empty repository or digest")

    return ImageIdentity(
        image_id=f"{repository}@{digest}", repository=repository, digest=digest
    )
