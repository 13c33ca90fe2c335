"""
JSON response bodies for the HTTP API
"""

from http import HTTPStatus

from flask import g, jsonify

SERVER_ERROR_MESSAGE = 'Server error'
INTERNAL_SERVER_ERROR = 'Internal server error, request ID {}'


def host_response(host, status=200):
    return jsonify(host.to_dict()), status


def hosts_response(hosts):
    return jsonify([host.to_dict() for host in hosts]), 200


def error_response(status, message, details):
    """
    Error body shared by every endpoint:
    {"error": <HTTP reason>, "message": <summary>, "details": <str or list>}
    """
    return jsonify({
        'error': HTTPStatus(status).phrase,
        'message': message,
        'details': details,
    }), status


def validation_error_response(message, field_errors):
    details = [
        {'field': e['field'], 'reason': e['reason'], 'value': e['value']}
        for e in field_errors
    ]
    return error_response(422, message, details)


def internal_error_response():
    request_id = g.get('request_id', '')
    return error_response(500, SERVER_ERROR_MESSAGE, INTERNAL_SERVER_ERROR.format(request_id))
