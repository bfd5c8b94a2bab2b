"""S3 client backends for upload benchmarking.

Available clients:
    S3ClientBoto3      - boto3 managed transfer (default, works everywhere)
    S3ClientMinio      - MinIO Python SDK (optional, requires minio package)

Both expose ``upload(key, data, metadata)`` which performs a single
multipart-capable upload with a fixed part size, and ``close()``.
"""

from __future__ import annotations

import urllib.parse
from io import BytesIO
from typing import Any

import boto3
import urllib3
from boto3.s3.transfer import TransferConfig
from botocore.config import Config

# Suppress SSL warnings for self-signed certificates
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


class S3ClientBoto3:
    """boto3 S3 client using path-style addressing.

    Every instance owns its own ``boto3`` session: the default
    session is not safe to share between threads while clients are
    being created. Automatic retries are disabled so that a failed
    request fails the run.
    """

    def __init__(
        self,
        *,
        bucket: str,
        endpoint_url: str,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        part_size: int,
        verify_ssl: bool = False,
    ) -> None:
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.part_size = part_size
        session = boto3.session.Session()
        self.client: Any = session.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
            verify=verify_ssl,
            config=Config(
                s3={"addressing_style": "path"},
                retries={"total_max_attempts": 1},
                connect_timeout=10,
                read_timeout=300,
            ),
        )
        self.transfer_config = TransferConfig(
            multipart_threshold=part_size,
            multipart_chunksize=part_size,
        )

    def upload(
        self,
        key: str,
        data: bytes,
        metadata: dict[str, str],
    ) -> None:
        """Upload object, split into ``part_size`` parts when larger."""
        self.client.upload_fileobj(
            BytesIO(data),
            self.bucket,
            key,
            ExtraArgs={"Metadata": metadata},
            Config=self.transfer_config,
        )

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.client.close()


class S3ClientMinio:
    """MinIO Python SDK client.

    Requires the ``minio`` package to be installed. Works with any
    S3-compatible endpoint; minio-py always uses path-style
    addressing for custom endpoints.
    """

    def __init__(
        self,
        *,
        bucket: str,
        endpoint_url: str,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        part_size: int,
        verify_ssl: bool = False,
    ) -> None:
        """Initialize minio-py client.

        Args:
            bucket: S3 bucket name.
            endpoint_url: S3 endpoint URL.
            access_key_id: Static access key.
            secret_access_key: Static secret key.
            region: S3 region.
            part_size: Multipart chunk size in bytes.
            verify_ssl: Verify TLS certificates.
        """
        try:
            from minio import Minio
        except ImportError as exc:
            raise ImportError(
                "minio package not installed. "
                "Run: pip install s3putbench[minio]"
            ) from exc

        self.bucket = bucket
        self.part_size = part_size

        parsed = urllib.parse.urlparse(endpoint_url)
        use_secure = parsed.scheme == "https"

        self.http_client = urllib3.PoolManager(
            timeout=300,
            cert_reqs="CERT_REQUIRED" if verify_ssl else "CERT_NONE",
            retries=False,
        )

        self.client = Minio(
            parsed.netloc,
            access_key=access_key_id,
            secret_key=secret_access_key,
            secure=use_secure,
            region=region,
            http_client=self.http_client,
        )

    def upload(
        self,
        key: str,
        data: bytes,
        metadata: dict[str, str],
    ) -> None:
        """Upload object, split into ``part_size`` parts when larger."""
        self.client.put_object(
            bucket_name=self.bucket,
            object_name=key,
            data=BytesIO(data),
            length=len(data),
            metadata=metadata,
            part_size=self.part_size,
        )

    def close(self) -> None:
        """Release pooled connections."""
        self.http_client.clear()
