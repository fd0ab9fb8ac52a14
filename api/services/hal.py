# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
HAL (Hypertext Application Language) response formatting utilities.
Builds resource, collection and RFC 7807 error responses with links.
"""

from typing import Dict, List, Any, Optional
from urllib.parse import urljoin, urlencode
import math

from domain.resolution import StationMatch
from models.entities import PollingStationInfo, StaticData
from models.requests import AddressQuery
from models.responses import HalLink

POLLING_STATIONS_PATH = "/api/polling-stations"
CONTENT_PATH = "/api/application-content"


class HalLinkBuilder:
    """Builder for HAL links with proper URL construction."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/') + '/'

    def build_link(
        self,
        path: str,
        method: str = "GET",
        content_type: Optional[str] = None,
        title: Optional[str] = None,
        templated: bool = False
    ) -> HalLink:
        """Build a HAL link with proper URL construction."""
        href = urljoin(self.base_url, path.lstrip('/'))

        return HalLink(
            href=href,
            method=method,
            type=content_type,
            title=title,
            templated=templated or None
        )

    def build_self_link(self, resource_path: str) -> HalLink:
        """Build self link for a resource."""
        return self.build_link(resource_path, title="Self")

    def build_collection_link(self, collection_path: str) -> HalLink:
        """Build link to parent collection."""
        return self.build_link(collection_path, title="Collection")


class PaginationLinkBuilder:
    """Builder for pagination links in HAL collections."""

    def __init__(self, base_url: str):
        self.link_builder = HalLinkBuilder(base_url)

    def _page_link(
        self,
        base_path: str,
        page: int,
        page_size: int,
        params: Dict[str, Any],
        title: str
    ) -> HalLink:
        query = urlencode({**params, 'page': page, 'page_size': page_size})
        return self.link_builder.build_link(f"{base_path}?{query}", title=title)

    def build_pagination_links(
        self,
        base_path: str,
        current_page: int,
        total_pages: int,
        page_size: int,
        query_params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, HalLink]:
        """Build pagination links for a collection."""
        params = query_params or {}
        links = {
            'self': self._page_link(base_path, current_page, page_size, params, "Current page")
        }

        if current_page > 1:
            links['first'] = self._page_link(base_path, 1, page_size, params, "First page")
            links['prev'] = self._page_link(
                base_path, current_page - 1, page_size, params, "Previous page"
            )

        if current_page < total_pages:
            links['next'] = self._page_link(
                base_path, current_page + 1, page_size, params, "Next page"
            )
            links['last'] = self._page_link(base_path, total_pages, page_size, params, "Last page")

        return links


class HalResponseBuilder:
    """Main HAL response builder."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')
        self.link_builder = HalLinkBuilder(base_url)
        self.pagination_builder = PaginationLinkBuilder(base_url)

    @staticmethod
    def _dump_links(links: Dict[str, HalLink]) -> Dict[str, Any]:
        return {rel: link.model_dump(exclude_none=True) for rel, link in links.items()}

    def build_resource_response(
        self,
        data: Dict[str, Any],
        links: Dict[str, HalLink]
    ) -> Dict[str, Any]:
        """Attach links to a resource representation."""
        response = dict(data)
        response['_links'] = self._dump_links(links)
        return response

    def build_collection_response(
        self,
        items: List[Dict[str, Any]],
        total: int,
        page: int,
        page_size: int,
        collection_path: str,
        query_params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Build a HAL collection response with pagination links."""
        total_pages = max(math.ceil(total / page_size), 1) if page_size > 0 else 1

        pagination_links = self.pagination_builder.build_pagination_links(
            collection_path,
            page,
            total_pages,
            page_size,
            query_params
        )

        return {
            'total': total,
            'page': page,
            'page_size': page_size,
            'total_pages': total_pages,
            '_links': self._dump_links(pagination_links),
            '_embedded': {
                'items': items
            }
        }

    def build_error_response(
        self,
        error_type: str,
        title: str,
        status: int,
        detail: str,
        instance: str,
        validation_errors: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        """Build RFC 7807 compliant error response with HAL links."""
        error_response = {
            'type': f"https://votromania.ro/problems/{error_type}",
            'title': title,
            'status': status,
            'detail': detail,
            'instance': instance
        }

        if validation_errors:
            error_response['errors'] = validation_errors

        links = {
            'help': self.link_builder.build_link(
                f"/docs/errors#{error_type}",
                title="Error documentation"
            )
        }

        if error_type == "validation-error":
            links['schema'] = self.link_builder.build_link(
                "/openapi/openapi.json",
                title="API schema"
            )
        elif error_type == "data-unavailable":
            links['retry'] = self.link_builder.build_link(
                instance,
                title="Retry"
            )

        error_response['_links'] = self._dump_links(links)
        return error_response


class HalFormatter:
    """High-level HAL formatter with convenience methods."""

    def __init__(self, base_url: str):
        self.builder = HalResponseBuilder(base_url)

    def _station_links(self, station_id: str) -> Dict[str, HalLink]:
        link_builder = self.builder.link_builder
        return {
            'self': link_builder.build_self_link(f"{POLLING_STATIONS_PATH}/{station_id}"),
            'collection': link_builder.build_collection_link(POLLING_STATIONS_PATH)
        }

    def format_polling_station(self, station: PollingStationInfo) -> Dict[str, Any]:
        """Format a polling station with HAL links."""
        return self.builder.build_resource_response(
            station.to_wire(),
            self._station_links(station.id)
        )

    def format_polling_station_collection(
        self,
        stations: List[PollingStationInfo],
        total: int,
        page: int,
        page_size: int
    ) -> Dict[str, Any]:
        """Format one page of polling stations."""
        items = [self.format_polling_station(station) for station in stations]
        return self.builder.build_collection_response(
            items, total, page, page_size, POLLING_STATIONS_PATH
        )

    def format_search_results(
        self,
        matches: List[StationMatch],
        query: AddressQuery
    ) -> Dict[str, Any]:
        """Format ranked search candidates with their match details."""
        items = []
        for rank, match in enumerate(matches, start=1):
            item = self.format_polling_station(match.station)
            item.update({
                'rank': rank,
                'specificity': match.specificity,
                'matchLevel': match.level.name.lower(),
                'exact': match.exact
            })
            items.append(item)

        interpreted = {
            'locality': query.locality,
            'street': query.street,
            'number': query.number
        }
        search_params = {key: value for key, value in interpreted.items() if value}
        search_path = f"{POLLING_STATIONS_PATH}/search"
        if search_params:
            search_path = f"{search_path}?{urlencode(search_params)}"

        links = {
            'self': self.builder.link_builder.build_self_link(search_path),
            'collection': self.builder.link_builder.build_collection_link(POLLING_STATIONS_PATH)
        }

        return {
            'total': len(items),
            'exactMatches': sum(1 for match in matches if match.exact),
            'query': interpreted,
            '_links': self.builder._dump_links(links),
            '_embedded': {
                'items': items
            }
        }

    def format_static_data(self, static_data: StaticData) -> Dict[str, Any]:
        """Format one language's content with HAL links."""
        link_builder = self.builder.link_builder
        links = {
            'self': link_builder.build_self_link(f"{CONTENT_PATH}/{static_data.language}"),
            'languages': link_builder.build_link(f"{CONTENT_PATH}/languages", title="Languages")
        }
        return self.builder.build_resource_response(static_data.to_wire(), links)

    def format_languages(
        self,
        languages: List[str],
        default_language: Optional[str] = None
    ) -> Dict[str, Any]:
        """Format the language list with a link per language."""
        link_builder = self.builder.link_builder
        links = {'self': link_builder.build_self_link(f"{CONTENT_PATH}/languages")}
        for language in languages:
            links[language] = link_builder.build_link(
                f"{CONTENT_PATH}/{language}", title=f"Content in {language}"
            )

        data = {'languages': list(languages)}
        if default_language in languages:
            data['defaultLanguage'] = default_language
        return self.builder.build_resource_response(data, links)

    def format_validation_error(
        self,
        detail: str,
        instance: str,
        validation_errors: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Format a validation error response."""
        return self.builder.build_error_response(
            "validation-error",
            "Validation Error",
            400,
            detail,
            instance,
            validation_errors
        )

    def format_not_found_error(
        self,
        detail: str,
        instance: str
    ) -> Dict[str, Any]:
        """Format a not found error response."""
        return self.builder.build_error_response(
            "resource-not-found",
            "Resource Not Found",
            404,
            detail,
            instance
        )

    def format_data_unavailable_error(
        self,
        detail: str,
        instance: str
    ) -> Dict[str, Any]:
        """Format a response for missing or failed application data."""
        return self.builder.build_error_response(
            "data-unavailable",
            "Data Unavailable",
            503,
            detail,
            instance
        )

    def format_server_error(
        self,
        detail: str,
        instance: str
    ) -> Dict[str, Any]:
        """Format a server error response."""
        return self.builder.build_error_response(
            "internal-server-error",
            "Internal Server Error",
            500,
            detail,
            instance
        )


# Convenience function for creating HAL formatter
def create_hal_formatter(base_url: str) -> HalFormatter:
    """Create a HAL formatter instance."""
    return HalFormatter(base_url)
