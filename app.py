"""
Flask Redirect Application
Main entry point for the redirect service.
"""
import logging

from flask import Flask, request, jsonify

from config import Config
from redirect_handler import RedirectHandler
from rule_source import create_rule_source

app = Flask(__name__)

# Initialize configuration
config = Config()
logging.basicConfig(
    level=config.get_log_level(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)
rule_source = create_rule_source(config)
redirect_handler = RedirectHandler(config, rule_source)


@app.before_request
def apply_redirects():
    """
    Redirect the request if a rule matches.
    Returning None lets Flask continue with normal request handling.
    """
    return redirect_handler.handle(request)


@app.route('/', defaults={'path': ''}, methods=['GET', 'POST', 'PUT', 'DELETE', 'PATCH', 'HEAD', 'OPTIONS'])
@app.route('/<path:path>', methods=['GET', 'POST', 'PUT', 'DELETE', 'PATCH', 'HEAD', 'OPTIONS'])
def passthrough(path):
    """
    Fallback handler for requests that were not redirected.
    Echoes what it received so the unmodified request is visible.
    """
    full_path = f'/{path}' if path else '/'
    return jsonify({
        'method': request.method,
        'path': full_path,
        'query_string': request.query_string.decode('utf-8'),
    }), 200


if __name__ == '__main__':
    port = config.get_listener_port()
    app.run(host='0.0.0.0', port=port, debug=False)
