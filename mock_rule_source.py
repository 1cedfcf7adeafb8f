"""
Mock Rule Source Server
A simple HTTP server that serves redirect rules from a JSON file for local testing.
"""
from flask import Flask, Response
import sys
import time
import os

app = Flask(__name__)

# Get port from command line argument or environment variable
port = int(sys.argv[1]) if len(sys.argv) > 1 else int(os.getenv('MOCK_PORT', '8090'))
redirects_file = os.getenv('REDIRECTS_FILE', 'redirects.json')
delay_ms = int(os.getenv('MOCK_DELAY_MS', '0'))
error_code = int(os.getenv('MOCK_ERROR_CODE', '0')) if os.getenv('MOCK_ERROR_CODE') else None


@app.route('/redirects', methods=['GET'])
def get_redirects():
    """
    Return the redirect rules, re-reading the file on every request so edits
    show up without a restart.
    """
    # Simulate delay if configured
    if delay_ms > 0:
        time.sleep(delay_ms / 1000.0)

    # Return error if configured
    if error_code:
        return '', error_code

    if not os.path.exists(redirects_file):
        return Response('[]', status=200, mimetype='application/json')

    with open(redirects_file, encoding='utf-8') as f:
        body = f.read()

    return Response(body, status=200, mimetype='application/json')


if __name__ == '__main__':
    print(f"Starting mock rule source on port {port}")
    print(f"  Serving: {redirects_file}")
    if delay_ms > 0:
        print(f"  Delay: {delay_ms}ms")
    if error_code:
        print(f"  Error code: {error_code}")
    app.run(host='0.0.0.0', port=port, debug=False)
