"""
Dashboard API Client

Talks to a remote dashboard_builder HTTP API. Lets a BuilderSession run
against a server instead of the local database.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..conf import api_settings
from ..exceptions import DashboardNotFoundError, PersistenceError
from .base import DashboardRecord, DashboardRepository

logger = logging.getLogger(__name__)


class DashboardApiClient(DashboardRepository):
    """
    Repository backed by the ``dashboards/`` REST endpoints.

    Args:
        base_url: API root, e.g. ``https://example.com/api/``
        token: Auth token sent as ``Authorization: <auth_scheme> <token>``
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        auth_scheme: str = "Token"
    ):
        self.base_url = (base_url or api_settings.API_BASE_URL).rstrip('/') + '/'
        self.token = token
        self.timeout = timeout if timeout is not None else api_settings.API_TIMEOUT
        self.auth_scheme = auth_scheme

    def _get_headers(self) -> dict:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"{self.auth_scheme} {self.token}"
        return headers

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(
                method,
                url,
                headers=self._get_headers(),
                timeout=self.timeout,
                **kwargs
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Dashboard API timeout: {method} {url}")
            raise PersistenceError("Connection timeout") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Dashboard API error: {method} {url}: {e}")
            raise PersistenceError(f"Request failed: {e}") from e

        if response.status_code == 404:
            raise DashboardNotFoundError(f"Dashboard not found: {path}")
        if not response.ok:
            raise PersistenceError(self._error_message(response))
        return response

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"API error: {response.status_code}"

        if isinstance(body, dict):
            if body.get('error'):
                return str(body['error'])
            if body.get('detail'):
                return str(body['detail'])
            messages = []
            for name, errors in body.items():
                if isinstance(errors, list):
                    messages.extend(str(error) for error in errors)
                else:
                    messages.append(f"{name}: {errors}")
            if messages:
                return "; ".join(messages)
        return f"API error: {response.status_code}"

    @staticmethod
    def _payload(title: str, description: str, layout: Dict[str, Any], is_public: bool) -> dict:
        return {
            'title': title,
            'description': description or '',
            'layout': layout,
            'is_public': is_public,
        }

    def create_dashboard(self, title: str, description: str, layout: Dict[str, Any], is_public: bool) -> str:
        response = self._request('POST', 'dashboards/', json=self._payload(title, description, layout, is_public))
        dashboard_id = str(response.json()['id'])
        logger.info(f"Created remote dashboard {dashboard_id}")
        return dashboard_id

    def update_dashboard(
        self,
        dashboard_id: str,
        title: str,
        description: str,
        layout: Dict[str, Any],
        is_public: bool
    ) -> None:
        self._request(
            'PUT',
            f'dashboards/{dashboard_id}/',
            json=self._payload(title, description, layout, is_public)
        )
        logger.info(f"Updated remote dashboard {dashboard_id}")

    def get_dashboard(self, dashboard_id: str) -> DashboardRecord:
        response = self._request('GET', f'dashboards/{dashboard_id}/')
        return DashboardRecord.from_dict(response.json())

    def list_dashboards(self, search: Optional[str] = None) -> List[DashboardRecord]:
        params = {'search': search} if search else None
        body = self._request('GET', 'dashboards/', params=params).json()
        # Paginated deployments wrap the list in "results"
        items = body.get('results', []) if isinstance(body, dict) else body
        return [DashboardRecord.from_dict(item) for item in items]

    def delete_dashboard(self, dashboard_id: str) -> None:
        self._request('DELETE', f'dashboards/{dashboard_id}/')
        logger.info(f"Deleted remote dashboard {dashboard_id}")
