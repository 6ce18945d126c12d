#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
QR Styler - Flask Web Application
"""

import base64
import json
import logging
from io import BytesIO
from typing import Any, Dict, Tuple

from flask import Flask, jsonify, render_template_string, request, send_file
from PIL import Image

from qr_styling import ConfigurationError, list_templates, render_content
from qr_styling.models import FrameStyle, GradientType, ModuleShape
from qr_styling.templates import apply_template

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Form fields forwarded to StylingOptions.from_dict as-is
OPTION_FIELDS = (
    'style', 'finderShape', 'cornerRadius',
    'gradientType', 'foregroundColor', 'backgroundColor',
    'frame', 'frameColor', 'frameText', 'frameTextColor', 'frameTextSize',
    'logoUrl', 'logoSize', 'errorCorrectionLevel', 'margin', 'moduleSize',
)

TEMPLATE = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>QR Styler</title>
  <style>
    body{font-family:Inter, Arial, sans-serif; padding:18px; background:#fff; color:#222}
    .row{display:flex; flex-wrap:wrap; gap:16px; align-items:flex-end; margin-top:12px}
    .field{display:flex; flex-direction:column; font-size:14px}
    input[type="text"], select{padding:6px 8px; font-family:monospace; border:1px solid #ccc; border-radius:6px}
    label{font-weight:600; margin-bottom:4px}
    button{padding:10px 16px; border-radius:8px; border:1px solid #333; background:#111; color:#fff; cursor:pointer}
  </style>
</head>
<body>
  <h1>QR Styler</h1>
  <form method="post" action="/render" enctype="multipart/form-data">
    <div class="row">
      <div class="field" style="flex:1 1 100%">
        <label>Text</label>
        <input type="text" name="text" placeholder="https://example.com">
      </div>
    </div>
    <div class="row">
      <div class="field"><label>Template</label>
        <select name="template"><option value="">(none)</option>
          {% for t in templates %}<option value="{{t.key}}">{{t.name}}</option>{% endfor %}
        </select></div>
      <div class="field"><label>Style</label>
        <select name="style"><option value="">(default)</option>{% for v in shapes %}<option value="{{v}}">{{v}}</option>{% endfor %}</select></div>
      <div class="field"><label>Gradient</label>
        <select name="gradientType"><option value="">(default)</option>{% for v in gradients %}<option value="{{v}}">{{v}}</option>{% endfor %}</select></div>
      <div class="field"><label>Gradient colors</label>
        <input type="text" name="gradientColors" placeholder="#000000,#3a0ca3"></div>
      <div class="field"><label>Frame</label>
        <select name="frame"><option value="">(default)</option>{% for v in frames %}<option value="{{v}}">{{v}}</option>{% endfor %}</select></div>
      <div class="field"><label>Frame text</label><input type="text" name="frameText"></div>
      <div class="field"><label>ECC</label>
        <select name="errorCorrectionLevel"><option value="">(default)</option>{% for v in ['L','M','Q','H'] %}<option value="{{v}}">{{v}}</option>{% endfor %}</select></div>
      <div class="field"><label>Logo URL</label><input type="text" name="logoUrl"></div>
      <div class="field"><label>Logo file</label><input type="file" name="logo"></div>
    </div>
    <div class="row"><button type="submit">Render</button></div>
  </form>
</body>
</html>
"""


def _read_params(req) -> Tuple[str, Dict[str, Any]]:
    """Extract the payload text and styling options from a Flask request."""
    text = (req.values.get('text') or "").strip()

    options: Dict[str, Any] = {}
    for name in OPTION_FIELDS:
        value = req.values.get(name)
        if value not in (None, ''):
            # Captions keep their whitespace
            options[name] = value if name == 'frameText' else value.strip()

    colors = req.values.get('gradientColors')
    if colors:
        options['gradientColors'] = [c.strip() for c in colors.split(',') if c.strip()]

    # Uploaded logo takes precedence over a logo URL
    if 'logo' in req.files and req.files['logo'].filename:
        file = req.files['logo']
        try:
            options['logoUrl'] = Image.open(file.stream).convert('RGBA')
            logger.info(f"Logo uploaded: {file.filename}")
        except Exception as ex:
            logger.warning(f"Could not read uploaded logo: {ex}")

    template = (req.values.get('template') or "").strip()
    if template:
        options = apply_template(template, options)

    return text, options


app = Flask(__name__)


@app.route('/', methods=['GET'])
def index():
    return render_template_string(
        TEMPLATE,
        templates=list_templates(),
        shapes=[m.value for m in ModuleShape],
        gradients=[g.value for g in GradientType],
        frames=[f.value for f in FrameStyle],
    )


@app.route('/templates', methods=['GET'])
def templates():
    return jsonify(list_templates())


@app.route('/render', methods=['GET', 'POST'])
def render():
    try:
        text, options = _read_params(request)
    except ConfigurationError as ex:
        return jsonify({'success': False, 'message': str(ex)}), 400
    if not text:
        return "Missing text", 400

    logger.info(f"Rendering QR code with options: {sorted(options)}")
    result = render_content(text, options)
    if not result.success:
        return jsonify(result.to_dict()), 400

    png = result.image.to_png()
    if request.values.get('format') == 'json':
        payload = result.to_dict()
        payload['png_b64'] = base64.b64encode(png).decode('ascii')
        return jsonify(payload)

    response = send_file(BytesIO(png), mimetype='image/png', download_name='qr_styled.png')
    response.headers['X-QR-Diagnostics'] = json.dumps([e.to_dict() for e in result.diagnostics])
    return response


if __name__ == "__main__":
    app.run(debug=True)
