"""Status and API documentation routes

The OpenAPI document is generated from the app's URL map: every
registered rule becomes a path, each view's first docstring line its summary.
"""
import re

from flask import Blueprint, current_app, jsonify

top_level_bp = Blueprint('top_level', __name__)

API_TITLE = 'Farm Home Backend API'
API_VERSION = '1.0.0'

# Paths reachable without a bearer token
PUBLIC_PATHS = {
    '/status',
    '/auth/login',
    '/auth/register',
    '/farmhouse',
    '/alerts/all-public',
    '/alerts/by-admin/{user_id}',
    '/alerts/by-manager/{user_id}',
    '/alerts/by-assistant/{user_id}',
}

SWAGGER_UI_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>{title}</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>
    window.onload = function () {{
      SwaggerUIBundle({{ url: "{spec_url}", dom_id: "#swagger-ui" }});
    }};
  </script>
</body>
</html>
"""

_RULE_ARG = re.compile(r'<(?:[^:<>]+:)?([^<>]+)>')


@top_level_bp.route('/status', methods=['GET'])
def status():
    """Liveness check"""
    return jsonify({
        'status': 'Up',
        'frontend': current_app.config.get('FRONT_END_URL')
    }), 200


def build_openapi_spec(app):
    """Generate an OpenAPI 3.0 document from the app's registered routes"""
    paths = {}
    for rule in app.url_map.iter_rules():
        if rule.endpoint == 'static' or rule.websocket or rule.rule.startswith('/api/docs'):
            continue
        path = _RULE_ARG.sub(r'{\1}', rule.rule)
        view = app.view_functions[rule.endpoint]
        summary = (view.__doc__ or rule.endpoint).strip().splitlines()[0]
        tag = path.strip('/').split('/')[0] or 'root'

        parameters = [
            {'name': name, 'in': 'path', 'required': True, 'schema': {'type': 'string'}}
            for name in rule.arguments
        ]
        for method in sorted(rule.methods - {'HEAD', 'OPTIONS'}):
            operation = {
                'summary': summary,
                'tags': [tag],
                'operationId': f'{rule.endpoint}_{method.lower()}',
                'responses': {'200': {'description': 'Success'}},
            }
            if parameters:
                operation['parameters'] = parameters
            if path in PUBLIC_PATHS and not (path == '/farmhouse' and method == 'POST'):
                operation['security'] = []
            paths.setdefault(path, {})[method.lower()] = operation

    return {
        'openapi': '3.0.0',
        'info': {
            'title': API_TITLE,
            'version': API_VERSION,
            'description': 'API documentation for Farm Home Backend',
        },
        'components': {
            'securitySchemes': {
                'bearerAuth': {'type': 'http', 'scheme': 'bearer', 'bearerFormat': 'JWT'}
            }
        },
        'security': [{'bearerAuth': []}],
        'paths': paths,
    }


@top_level_bp.route('/api/docs/openapi.json', methods=['GET'])
def openapi_spec():
    """OpenAPI document"""
    return jsonify(build_openapi_spec(current_app))


@top_level_bp.route('/api/docs', methods=['GET'])
def api_docs():
    """Interactive API documentation"""
    html = SWAGGER_UI_HTML.format(title=API_TITLE, spec_url='/api/docs/openapi.json')
    return current_app.response_class(html, mimetype='text/html')
