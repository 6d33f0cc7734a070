# s3.py
import boto3
import logging
from typing import List, Optional
from .config import AmazonS3Settings
from .storage.base import StorageAdapter
from .storage.dto import ListingEntry


class AmazonS3Adapter(StorageAdapter):
    """
    Placeholder adapter for Amazon S3.

    The client and bucket are set up on construction, but no operation is
    implemented yet: every call raises NotImplementedError.
    """

    def __init__(self, settings: AmazonS3Settings, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.client = boto3.client(
            "s3",
            aws_access_key_id=settings.AWS_S3_KEY,
            aws_secret_access_key=settings.AWS_S3_SECRET,
            region_name=settings.AWS_S3_REGION,
        )
        self.bucket = settings.AWS_S3_BUCKET
        self.logger.info(f"Amazon S3 client initialized for bucket '{self.bucket}'.")

    def get_full_path(self, path: Optional[str] = None) -> str:
        raise NotImplementedError("get_full_path is not implemented for Amazon S3")

    def get_list(
        self, path: str, depth: int = 0, limit: Optional[int] = None
    ) -> List[ListingEntry]:
        raise NotImplementedError("get_list is not implemented for Amazon S3")

    def download(self, src: str, dst: str, overwrite: bool = False) -> str:
        raise NotImplementedError("download is not implemented for Amazon S3")

    def upload(self, src: str, dst: str) -> bool:
        raise NotImplementedError("upload is not implemented for Amazon S3")

    def delete(self, remote: str) -> bool:
        raise NotImplementedError("delete is not implemented for Amazon S3")

    def delete_recursive(self, items: List[ListingEntry], depth: int = 0) -> bool:
        raise NotImplementedError("delete_recursive is not implemented for Amazon S3")

    def create_folder(self, path: str) -> bool:
        raise NotImplementedError("create_folder is not implemented for Amazon S3")

    def exists(self, path: str) -> bool:
        raise NotImplementedError("exists is not implemented for Amazon S3")
