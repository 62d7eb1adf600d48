from typing import Optional

REPORT_ISSUE = "Please report this issue at https://github.com/minio/minio/issues."


class AdminErrorResponse(Exception):
    """
    Typed error returned by admin API operations.

    Mirrors the server's error document::

        <Error>
           <Code>AccessDenied</Code>
           <Message>Access Denied</Message>
           <BucketName>bucketName</BucketName>
           <Key>objectName</Key>
           <RequestId>F19772218238A85A</RequestId>
           <HostId>GuWkjyviSiGHizehqpmsD1ndz5NClSP19DOT+s2mv7gXGQ8/X1lhbDGiIJEXpGFD</HostId>
        </Error>
    """

    def __init__(
        self,
        code: str = "",
        message: str = "",
        bucket_name: str = "",
        key: str = "",
        request_id: str = "",
        host_id: str = "",
        region: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.bucket_name = bucket_name
        self.key = key
        self.request_id = request_id
        self.host_id = host_id
        # Only returned by HEAD bucket and ListObjects
        self.region = region or ""

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"AdminErrorResponse(code={self.code!r}, message={self.message!r})"


def invalid_argument(message: str) -> AdminErrorResponse:
    return AdminErrorResponse(code="InvalidArgument", message=message, request_id="minio")
