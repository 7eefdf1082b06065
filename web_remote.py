#!/usr/bin/env python3
"""
web_remote.py  –  web UI + remote control for the camera matrix

Endpoints
---------
/               → HTML page with one button per camera plus pan / quit
/state          → JSON snapshot (active camera, HUD, pan label, camera list)
/action?cmd=…   → inject control commands (select&id=…, next, prev, pan, quit)
/log            → contents of runtime.log (if present)
"""

from __future__ import annotations
import http.server
import json
import socketserver
import threading
import time
import urllib.parse
from typing import TYPE_CHECKING, Any

from loguru import logger

from events import EventManager
import config

if TYPE_CHECKING:                       # avoid circular import at runtime
    from app import CamMatrixViewer


# ── reusable threaded HTTP server ──────────────────────────────────────────
class ReusableTCPServer(socketserver.ThreadingMixIn, http.server.HTTPServer):
    daemon_threads      = True
    allow_reuse_address = True


# ── state snapshot (for /state endpoint) ───────────────────────────────────
def state_payload(viewer: "CamMatrixViewer") -> dict[str, Any]:
    sel = viewer.selector
    cam = sel.active_camera
    return {
        "state":      sel.state,
        "active_id":  sel.session.active_id,
        "location":   cam.location if cam else None,
        "status":     cam.status.label if cam else None,
        "hud":        sel.hud_line,
        "pan":        {"enabled": sel.pan.enabled, "paused": sel.pan.paused,
                       "label": sel.pan_label},
        "glitching":  sel.glitch.running,
        "error":      viewer.error,
        "sections": [
            {"label": label,
             "cameras": [{"id": c.id, "location": c.location, "distance": c.distance,
                          "status": c.status.label, "dot": c.status.dot}
                         for c in cams]}
            for label, cams in viewer.registry.sections()
        ],
    }


# ── request handler ────────────────────────────────────────────────────────
class RemoteHandler(http.server.BaseHTTPRequestHandler):
    def log_message(self, *args):
        return  # silence default logging

    def do_GET(self):
        parsed = urllib.parse.urlparse(self.path)
        path, qs = parsed.path, parsed.query

        if path == "/":
            return self._serve_html()
        if path == "/state":
            return self._serve_json(state_payload(self.server.viewer))   # type: ignore
        if path == "/log":
            return self._serve_log()
        if path == "/action":
            return self._serve_action(qs)

        self.send_error(404, "Not found")

    # ── helpers for each route ───────────────────────────────────────────
    def _serve_html(self):
        self.send_response(200)
        self.send_header("Content-Type", "text/html")
        self.end_headers()
        self.wfile.write(HTML_PAGE.encode("utf-8"))

    def _serve_json(self, obj: Any):
        b = json.dumps(obj).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(b)))
        self.end_headers()
        self.wfile.write(b)

    def _serve_log(self):
        try:
            with open(config.LOG_FILE, "rb") as f:
                data = f.read()
        except OSError:
            return self.send_error(404, "Log file not found")
        self.send_response(200)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def _serve_action(self, query: str):
        action = parse_action(query, self.server.viewer.registry)   # type: ignore
        if isinstance(action, tuple):
            return self.send_error(*action)

        EventManager.post(action)
        self.send_response(204)
        self.end_headers()


def parse_action(query: str, registry) -> dict | tuple[int, str]:
    """Map an /action query string to an EventManager action or an HTTP error."""
    qs  = urllib.parse.parse_qs(query)
    cmd = qs.get("cmd", [""])[0]

    if cmd == "select":
        cam_id = qs.get("id", [""])[0]
        if cam_id not in registry:
            return 404, f"Unknown camera {cam_id!r}"
        return {"type": "select_camera", "id": cam_id}
    if cmd == "next":
        return {"type": "select_next"}
    if cmd == "prev":
        return {"type": "select_prev"}
    if cmd == "pan":
        return {"type": "toggle_pan"}
    if cmd == "quit":
        return {"type": "quit"}
    return 400, "Unknown cmd"


# ── simple HTML UI ─────────────────────────────────────────────────────────
HTML_PAGE = """
<!doctype html><html><head><meta charset="utf-8">
<title>Camera Matrix Remote</title>
<style>
 body{background:#000;color:#0f0;font-family:monospace;padding:1em;}
 a.button,button{display:inline-block;margin:4px;padding:6px 12px;border:1px solid #0f0;
          background:#000;text-decoration:none;color:#0f0;font-family:monospace;}
 button.active{background:#0f0;color:#000;}
 pre{margin:0.5em 0;font-family:monospace;}
 .ok{color:#0f0}.warn{color:#cc3}.err{color:#f33}
</style></head><body>
<h2>Camera Matrix Remote</h2>
<a class="button" href="/action?cmd=prev">▲ Prev</a>
<a class="button" href="/action?cmd=next">Next ▼</a>
<a class="button" id="pan" href="/action?cmd=pan">PAUSE PAN</a>
<a class="button" href="/action?cmd=quit">Quit</a>
<a class="button" href="/log">View log</a>

<div id="cams"></div>
<div><h3>Active</h3><pre id="active"></pre></div>

<script>
 async function select(id){ await fetch('/action?cmd=select&id=' + encodeURIComponent(id)); }
 async function refreshUI(){
   try {
     let r = await fetch('/state'); let st = await r.json();
     document.getElementById('pan').textContent = st.pan.label;
     let cams = document.getElementById('cams');
     cams.replaceChildren();
     for (let sec of st.sections){
       let h = document.createElement('h3');
       h.textContent = sec.label;
       cams.appendChild(h);
       for (let c of sec.cameras){
         let b = document.createElement('button');
         if (c.id === st.active_id) b.className = 'active';
         let dot = document.createElement('span');
         dot.className = c.dot;
         dot.textContent = '●';
         b.appendChild(dot);
         b.appendChild(document.createTextNode(' ' + c.location + ' ' + c.distance));
         b.addEventListener('click', () => select(c.id));
         cams.appendChild(b);
       }
     }
     document.getElementById('active').textContent =
       st.error ? 'ERROR ' + st.error
                : (st.location || '—') + '\\n' + (st.status || '—') + '\\n' + st.hud;
   } catch(e){
     console.error(e);
   }
 }
 setInterval(refreshUI, 500);
 refreshUI();
</script>
</body></html>
"""


# ── server bootstrap with auto-restart ────────────────────────────────────
def start(viewer: "CamMatrixViewer", port: int = config.WEB_REMOTE_PORT):
    def _serve_loop():
        while True:
            try:
                with ReusableTCPServer(("", port), RemoteHandler) as httpd:
                    httpd.viewer = viewer
                    httpd.serve_forever()
            except OSError as exc:
                logger.error(f"Web remote crashed: {exc}")
                time.sleep(1)

    threading.Thread(target=_serve_loop, daemon=True).start()
    logger.info(f"Web remote listening on port {port}")
