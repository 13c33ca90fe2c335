"""
dnsmasq Manager HTTP API

Routes:
- GET    /api/v1/static/hosts             -> all static hosts
- GET    /api/v1/static/host?mac=|ip=     -> one static host (404 if absent)
- POST   /api/v1/static/host              -> insert, 409 on duplicated MAC/IP
- PUT    /api/v1/static/host              -> insert or replace
- DELETE /api/v1/static/host?mac=|ip=     -> removed host (204 if absent)
- GET    /health

Host JSON: {"MacAddress": "02:04:06:aa:bb:cc", "IPAddress": "1.1.1.1", "HostName": "Foo"}
"""

import logging
import time
import uuid

from flask import Blueprint, Flask, current_app, g, jsonify, request

from ..config import load_config
from ..hosts import HostRepository, HostService
from ..hosts.errors import DuplicateEntryError, InvalidFieldError
from ..hosts.model import parse_ip, parse_mac
from . import presenter
from .validation import validate_host_body

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = 'X-Request-Id'

INVALID_REQUEST_MESSAGE = 'Invalid request'
MISSING_QUERY_PARAMETER = 'Missing query parameter: mac or ip'
INVALID_MAC_ADDRESS_MESSAGE = 'Invalid MAC address'
MALFORMED_MAC_ADDRESS = 'Malformed MAC address: {}'
INVALID_IP_ADDRESS_MESSAGE = 'Invalid IP address'
MALFORMED_IP_ADDRESS = 'Malformed IP address: {}'
STATIC_HOST_NOT_FOUND_MESSAGE = 'Static host not found'
NO_MATCHING_MAC_ADDRESS = 'No static host with MAC address {}'
NO_MATCHING_IP_ADDRESS = 'No static host with IP address {}'
INVALID_BODY_MESSAGE = 'Invalid request body'
MALFORMED_JSON = 'Request body must be a JSON object'
INVALID_STATIC_HOST_MESSAGE = 'Invalid static host'
DUPLICATED_STATIC_HOST_MESSAGE = 'Duplicated static host'

api_v1 = Blueprint('api_v1', __name__, url_prefix='/api/v1')


def get_service():
    return current_app.extensions['host_service']


def lookup_key():
    """
    Resolve the ?mac= / ?ip= query parameter.

    Returns (kind, value, None) on success or (None, None, error_response).
    mac wins when both are given.
    """
    mac = request.args.get('mac')
    ip = request.args.get('ip')

    if mac:
        try:
            return 'mac', parse_mac(mac), None
        except InvalidFieldError:
            return None, None, presenter.error_response(
                400, INVALID_MAC_ADDRESS_MESSAGE, MALFORMED_MAC_ADDRESS.format(mac))
    if ip:
        try:
            return 'ip', parse_ip(ip), None
        except InvalidFieldError:
            return None, None, presenter.error_response(
                400, INVALID_IP_ADDRESS_MESSAGE, MALFORMED_IP_ADDRESS.format(ip))

    return None, None, presenter.error_response(400, INVALID_REQUEST_MESSAGE, MISSING_QUERY_PARAMETER)


def host_from_body():
    """Returns (host, None) or (None, error_response)"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, presenter.error_response(422, INVALID_BODY_MESSAGE, MALFORMED_JSON)

    host, errors = validate_host_body(data)
    if errors:
        return None, presenter.validation_error_response(INVALID_STATIC_HOST_MESSAGE, errors)
    return host, None


def not_found(kind, value):
    template = NO_MATCHING_MAC_ADDRESS if kind == 'mac' else NO_MATCHING_IP_ADDRESS
    return presenter.error_response(404, STATIC_HOST_NOT_FOUND_MESSAGE, template.format(value))


def internal_error(e):
    logger.exception(f"Request {g.get('request_id', '')} failed: {e}")
    return presenter.internal_error_response()


@api_v1.route('/static/hosts')
def get_all_static_hosts():
    """List every static host"""
    try:
        hosts = get_service().fetch_all()
    except Exception as e:
        return internal_error(e)
    return presenter.hosts_response(hosts)


@api_v1.route('/static/host')
def get_static_host():
    """Fetch a static host by MAC or IP address"""
    kind, value, error = lookup_key()
    if error:
        return error

    service = get_service()
    try:
        host = service.fetch_by_mac(value) if kind == 'mac' else service.fetch_by_ip(value)
    except Exception as e:
        return internal_error(e)

    if host is None:
        return not_found(kind, value)
    return presenter.host_response(host)


@api_v1.route('/static/host', methods=['POST'])
def add_static_host():
    """Insert a new static host"""
    host, error = host_from_body()
    if error:
        return error

    try:
        get_service().insert(host)
    except DuplicateEntryError as e:
        return presenter.error_response(409, DUPLICATED_STATIC_HOST_MESSAGE, str(e))
    except Exception as e:
        return internal_error(e)
    return presenter.host_response(host, 201)


@api_v1.route('/static/host', methods=['PUT'])
def update_static_host():
    """Insert or replace a static host"""
    host, error = host_from_body()
    if error:
        return error

    try:
        get_service().update(host)
    except Exception as e:
        return internal_error(e)
    return presenter.host_response(host, 201)


@api_v1.route('/static/host', methods=['DELETE'])
def delete_static_host():
    """Remove a static host by MAC or IP address"""
    kind, value, error = lookup_key()
    if error:
        return error

    service = get_service()
    try:
        host = service.remove_by_mac(value) if kind == 'mac' else service.remove_by_ip(value)
    except Exception as e:
        return internal_error(e)

    if host is None:
        return '', 204
    return presenter.host_response(host)


def assign_request_id():
    g.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    g.request_started = time.monotonic()


def log_request(response):
    response.headers[REQUEST_ID_HEADER] = g.get('request_id', '')
    latency_ms = (time.monotonic() - g.get('request_started', time.monotonic())) * 1000
    logger.info(f"{request.method} {request.path} {response.status_code} "
                f"{latency_ms:.1f}ms requestId={g.get('request_id', '')} ip={request.remote_addr}")
    return response


def create_app(config=None, service=None):
    """
    Build the Flask application.

    service defaults to a HostService over config.host_static_file.
    """
    if service is None:
        config = config or load_config()
        service = HostService(HostRepository(config.host_static_file))

    app = Flask(__name__)
    app.extensions['host_service'] = service
    app.before_request(assign_request_id)
    app.after_request(log_request)
    app.register_blueprint(api_v1)

    @app.route('/health')
    def health():
        """Health check endpoint"""
        return jsonify({'status': 'ok'})

    return app
