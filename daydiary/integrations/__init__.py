"""
Integrations with external services.

- media_host.py: upload and delete files on the third-party media host

The service never proxies file bytes: clients upload directly to the host
and register the resulting URL; the server only talks to the host when it
cleans up after a gallery deletion.
"""

from daydiary.integrations.media_host import MediaHostClient, UploadedAsset, public_id_from_url

__all__ = ["MediaHostClient", "UploadedAsset", "public_id_from_url"]
