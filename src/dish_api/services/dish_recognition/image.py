"""Image payload normalization."""


def normalize_image(raw: str) -> str:
    """
    Strip a data-URI prefix (``data:image/jpeg;base64,``) from an image payload.

    Everything after the first comma is kept; input without a comma is returned
    unchanged. The mime type and the payload itself are not validated, the
    provider reports malformed images through its own error codes.
    """
    if "," in raw:
        return raw.split(",", 1)[1]
    return raw
