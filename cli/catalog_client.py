"""HTTP client for communicating with the catalog service."""

import time
import uuid
from typing import List, Optional

import httpx

from common.logging_config import get_logger
from cli.config import Config
from cli.constants import FILES_ENDPOINT, GREEN, INGEST_ENDPOINT, RED, RESET
from cli.utils import format_file_record

logger = get_logger(__name__)


class CatalogClient:
    """HTTP client for the catalog API with retry logic and error handling."""

    def __init__(self, config: Config):
        """
        Initialize catalog client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized CatalogClient [base_url={config.get_base_url()}]")

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, ...)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        headers = dict(kwargs.pop('headers', None) or {})
        headers['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, headers=headers, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                if 400 <= response.status_code < 500:
                    logger.warning(
                        f"Client error: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                    )
                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                    )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Server may be overloaded.")
        raise ConnectionError("Cannot connect to catalog server. Is it running?")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.

        Args:
            response: HTTP response object

        Returns:
            User-friendly error message
        """
        try:
            error_data = response.json()
        except ValueError:
            error_data = {}

        if error_data.get('errors'):
            lines = ['Validation failed:']
            for error in error_data['errors']:
                lines.append(f"  {error.get('field') or 'body'}: {error.get('message')} ({error.get('code')})")
            return '\n'.join(lines)

        code = error_data.get('code', 'UNKNOWN')

        error_messages = {
            'INGESTION_FAILED': 'Ingestion failed and nothing was saved. Please retry the batch.',
            'STORE_UNAVAILABLE': 'Catalog storage is currently unavailable. Please try again later.',
            'INTERNAL_ERROR': 'Server error.',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            404: 'Not found',
            500: 'Server error',
            503: 'Service unavailable',
        }

        message = status_messages.get(response.status_code, error_data.get('detail') or response.text or 'Unknown error')
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def ingest_files(self, descriptors: List[dict]) -> str:
        """
        Submit a batch of file descriptors.

        Args:
            descriptors: Dicts with filename, fileType, path and optional lastIndexedAt / tags

        Returns:
            Summary of the ingestion, listing any files that failed
        """
        logger.info(f"Ingesting {len(descriptors)} files")
        try:
            response = self._request_with_retry(
                'POST',
                INGEST_ENDPOINT,
                json={'files': descriptors}
            )

            if response.status_code != 200:
                logger.warning(f"Ingestion rejected: status={response.status_code}")
                return f"Error: {self._format_error(response)}"

            data = response.json()
            summary = data['summary']
            output = [
                f"{GREEN}Ingested {summary['successful']}/{summary['total']} file(s){RESET}"
            ]
            for result in data.get('results', []):
                if not result['success']:
                    output.append(f"{RED}  Failed: {result['path']} ({result.get('error', 'unknown error')}){RESET}")
            return '\n'.join(output)

        except ConnectionError as e:
            logger.error(f"Connection error during ingestion: {e}")
            return f"Error: {e}"

    def list_files(self) -> str:
        """
        List every file in the catalog.

        Returns:
            Formatted list of files
        """
        try:
            response = self._request_with_retry('GET', FILES_ENDPOINT)

            if response.status_code != 200:
                return f"Error: {self._format_error(response)}"

            data = response.json()
            files = data['files']

            if not files:
                return "No files in catalog"

            output = [f"Found {data['count']} file(s):\n"]
            output.extend(format_file_record(record) for record in files)
            return '\n'.join(output)

        except ConnectionError as e:
            logger.error(f"Connection error while listing files: {e}")
            return f"Error: {e}"

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
