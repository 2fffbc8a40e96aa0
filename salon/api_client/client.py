"""
HTTP client for the salon REST API.

Mirrors the resources the front end talks to: one wrapper per resource,
JWT bearer auth, and errors surfaced as ApiError after being logged.
"""
import logging
from typing import Dict, Optional

import requests

logger = logging.getLogger('salon.api_client')

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, status_code: int, payload=None, url: str = ''):
        self.status_code = status_code
        self.payload = payload
        self.url = url
        super().__init__(f"API error {status_code} on {url}: {payload}")


class Resource:
    """CRUD wrapper for one collection endpoint"""

    def __init__(self, api: 'SalonApiClient', path: str):
        self.api = api
        self.path = path.strip('/')

    def _item(self, pk) -> str:
        return f"{self.path}/{pk}/"

    def get_all(self, **params):
        return self.api.request('GET', f"{self.path}/", params=params or None)

    def get_by_id(self, pk):
        return self.api.request('GET', self._item(pk))

    def create(self, data: Dict):
        return self.api.request('POST', f"{self.path}/", json=data)

    def update(self, pk, data: Dict):
        return self.api.request('PUT', self._item(pk), json=data)

    def delete(self, pk):
        return self.api.request('DELETE', self._item(pk))


class StatusResource(Resource):
    """Resources whose default list holds only active records"""

    def get_all_status(self, **params):
        return self.api.request('GET', f"{self.path}/all-status/", params=params or None)


class SearchableResource(Resource):

    def search(self, query: str):
        return self.api.request('GET', f"{self.path}/search/", params={'q': query})


class ClientsResource(SearchableResource):

    def get_page(self, page: int, limit: int = 50, **params):
        """One page of clients: {results, count, next, previous, page, page_size, total_pages}"""
        return self.api.request('GET', f"{self.path}/", params={'page': page, 'limit': limit, **params})


class ReportsResource:

    def __init__(self, api: 'SalonApiClient'):
        self.api = api

    def get_data(self, start_date, end_date, category: Optional[str] = None):
        params = {
            'start_date': start_date.isoformat() if hasattr(start_date, 'isoformat') else start_date,
            'end_date': end_date.isoformat() if hasattr(end_date, 'isoformat') else end_date,
        }
        if category:
            params['category'] = category
        return self.api.request('GET', 'reports/', params=params)


class SalonApiClient:
    """Entry point: SalonApiClient('http://host/api/v1', token=...)"""

    def __init__(self, base_url: str, token: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: int = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

        self.clients = ClientsResource(self, 'clients')
        self.professionals = StatusResource(self, 'professionals')
        self.services = StatusResource(self, 'services')
        self.packages = StatusResource(self, 'packages')
        self.appointments = SearchableResource(self, 'appointments')
        self.payments = Resource(self, 'payments')
        self.reports = ReportsResource(self)

    def _headers(self) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def request(self, method: str, path: str, params: Optional[Dict] = None, json: Optional[Dict] = None):
        """Send a request and return the decoded body (None for empty responses)"""
        url = f"{self.base_url}/{path.lstrip('/')}"
        response = self.session.request(
            method, url, params=params, json=json, headers=self._headers(), timeout=self.timeout
        )
        if not response.content:
            payload = None
        else:
            try:
                payload = response.json()
            except ValueError:
                payload = response.text

        if response.status_code >= 400:
            logger.error(f"API Error: {method} {url} -> {response.status_code} {payload}")
            raise ApiError(response.status_code, payload, url)
        logger.debug(f"{method} {url} -> {response.status_code}")
        return payload

    def login(self, username: str, password: str) -> Dict:
        """Obtain a JWT pair and use its access token from now on"""
        tokens = self.request('POST', 'auth/login/', json={'username': username, 'password': password})
        self.token = tokens['access']
        return tokens
