"""HTTP transport shared by the Open-Meteo geocoder and forecast provider."""
import logging
import requests
from typing import Any, Dict
from weather_provider import NetworkError, UpstreamError


def fetch_json(url: str, params: Dict[str, Any], timeout: float) -> Dict[str, Any]:
    """
    Issue a single GET request and decode its JSON object body.

    Args:
        url: Endpoint URL
        params: Query string parameters (URL-encoded by requests)
        timeout: HTTP request timeout in seconds

    Returns:
        Decoded JSON object

    Raises:
        NetworkError: On transport failure or a non-2xx status
        UpstreamError: If a successful response is not a JSON object
    """
    logging.info(f"Making Open-Meteo request: {url}")
    logging.debug(f"Request parameters: {params}")

    try:
        response = requests.get(url, params=params, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logging.error(f"Network error during API request: {e}")
        raise NetworkError(f"Network error: {str(e)}") from e

    logging.info(f"API response status: {response.status_code}")

    if not response.ok:
        logging.error(f"API request failed with status {response.status_code}")
        _raise_error_response(response)

    try:
        data = response.json()
    except ValueError as e:
        logging.error(f"Failed to decode API response: {e}")
        raise UpstreamError(f"Invalid JSON in response from {url}") from e

    if not isinstance(data, dict):
        raise UpstreamError(f"Expected a JSON object from {url}, got {type(data).__name__}")

    logging.debug(f"API response (truncated): {str(data)[:500]}...")
    return data


def _raise_error_response(response: requests.Response) -> None:
    """Parse and raise error from an Open-Meteo error response."""
    try:
        error_data = response.json()
    except ValueError:
        # Not JSON, use HTTP status
        logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
        raise NetworkError(
            f"HTTP {response.status_code}: {response.text[:200]}",
            status_code=response.status_code,
        )

    reason = error_data.get("reason", "Unknown error") if isinstance(error_data, dict) else "Unknown error"
    logging.error(f"Open-Meteo API error response: {error_data}")
    raise NetworkError(
        f"Open-Meteo API error {response.status_code}: {reason}",
        status_code=response.status_code,
    )
