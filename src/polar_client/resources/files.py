"""File uploads."""

from typing import Any, Iterator

from ..models.files import File, FileCreate, FileUpdate, FileUploadCompleted
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import FilesQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class FilesResource(BaseResource):
    """
    Upload files for downloadable benefits, product media and avatars.

    Uploads are multipart: `create` returns presigned part URLs, the caller
    PUTs each chunk, then `complete_upload` reports the part ETags.
    """

    query_builder = FilesQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[File]]:
        return self._list("files/", File, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[File]]:
        return self._list_all("files/", File, query, filters, timeout)

    def get(self, file_id: str, timeout: float | None = None) -> PolarResult[File]:
        if error := self._require(file_id=file_id):
            return PolarResult.fail(error)
        return self._get(f"files/{segment(file_id)}", File, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[File]:
        return self._send("POST", "files/", data, FileCreate, File, timeout)

    def update(self, file_id: str, data: Payload, timeout: float | None = None) -> PolarResult[File]:
        if error := self._require(file_id=file_id):
            return PolarResult.fail(error)
        return self._send("PATCH", f"files/{segment(file_id)}", data, FileUpdate, File, timeout)

    def delete(self, file_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(file_id=file_id):
            return PolarResult.fail(error)
        return self._delete(f"files/{segment(file_id)}", timeout=timeout)

    def complete_upload(self, file_id: str, data: Payload, timeout: float | None = None) -> PolarResult[File]:
        if error := self._require(file_id=file_id):
            return PolarResult.fail(error)
        return self._send("POST", f"files/{segment(file_id)}/uploaded", data, FileUploadCompleted, File, timeout)
