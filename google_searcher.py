"""
Google Custom Search API integration for LinkedIn profile searches.
"""
import requests
import time
import logging
from typing import List, Dict, Optional
from config.settings import get_settings, Settings
from errors import ConfigurationError, SearchError
from models.search_result_item import SearchResultItem

logger = logging.getLogger(__name__)


class GoogleSearcher:
    """Handles Google Custom Search API integration for LinkedIn profiles."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.api_key = self.settings.google_api_key
        self.cse_id = self.settings.google_cse_id
        self.session = session or requests.Session()
        self.api_calls_made = 0

        if not self.api_key or not self.cse_id:
            raise ConfigurationError("Google API key and Custom Search Engine ID must be set in .env file")

    def search_single_page(self, query: str, start_index: int = 1) -> Dict:
        """Execute a single Google Custom Search API request.

        Raises SearchError on rate limiting, API errors and exhausted retries.
        """
        params = {
            'key': self.api_key,
            'cx': self.cse_id,
            'q': query,
            'num': self.settings.results_per_page,
            'start': start_index,
        }

        last_error = None
        for attempt in range(self.settings.max_retries):
            try:
                logger.info(f"Making API call {self.api_calls_made + 1}, start index: {start_index}")
                response = self.session.get(
                    self.settings.google_search_url,
                    params=params,
                    timeout=self.settings.request_timeout_seconds,
                )
                self.api_calls_made += 1
            except requests.exceptions.RequestException as e:
                last_error = e
                logger.warning(f"Request error on attempt {attempt + 1} for \"{query}\": {e}")
                if attempt < self.settings.max_retries - 1:
                    time.sleep(2 ** attempt)  # Exponential backoff
                continue

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError as e:
                    raise SearchError(f"Invalid JSON from Google Search API: {e}") from e
            if response.status_code == 429:
                raise SearchError("API rate limit exceeded")
            raise SearchError(f"Google Search API error {response.status_code} - {self._error_message(response)}")

        raise SearchError(f"Request failed after {self.settings.max_retries} attempts: {last_error}")

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return 'Unknown error'
        error = payload.get('error') if isinstance(payload, dict) else None
        if isinstance(error, dict) and error.get('message'):
            return error['message']
        return 'Unknown error'

    def search(self, query: str, page_offset: int = 1) -> List[SearchResultItem]:
        """Return one page of results; any failure is logged and yields an empty list."""
        try:
            data = self.search_single_page(query, page_offset)
        except SearchError as e:
            logger.error(f"Search failed for \"{query}\": {e}")
            return []
        items = data.get('items') or [] if isinstance(data, dict) else []
        return [SearchResultItem.from_google_item(item) for item in items if isinstance(item, dict)]

    def get_api_usage(self) -> Dict:
        """Return API usage statistics."""
        return {
            'api_calls_made': self.api_calls_made,
            'estimated_daily_limit_used': f"{(self.api_calls_made / 100) * 100:.1f}%"
        }
