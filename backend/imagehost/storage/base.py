"""
Base class for object store backends.
The upload and retrieval handlers only talk to this interface.
"""
from abc import ABC, abstractmethod
from typing import Dict


class ObjectStore(ABC):
    """
    Abstract object store.

    Implementations are synchronous; the API layer runs them in a worker
    thread. Every backend failure must surface as StorageError.
    """

    @property
    @abstractmethod
    def bucket(self) -> str:
        """Name of the bucket objects are written to."""

    @abstractmethod
    def put_object(
        self,
        key: str,
        body: bytes,
        content_type: str,
        metadata: Dict[str, str],
    ) -> None:
        """
        Store body under key.

        Raises:
            StorageError: If the backend rejects or fails the write
        """

    @abstractmethod
    def object_exists(self, key: str) -> bool:
        """
        Check whether key exists.

        Returns:
            True if present, False if the backend reports it missing

        Raises:
            StorageError: For any other backend failure
        """

    @abstractmethod
    def presigned_get_url(self, key: str, expires_in: int) -> str:
        """
        Mint a signed GET URL for key valid for expires_in seconds.

        Raises:
            StorageError: If signing fails
        """

    @abstractmethod
    def ping(self) -> None:
        """
        Verify the bucket is reachable.

        Raises:
            StorageError: If it is not
        """
