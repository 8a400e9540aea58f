#!/usr/bin/env python3
"""
web_remote.py  –  status page + diagnostics + remote control

Endpoints
---------
/               → HTML page with buttons, overlay text, diagnostics, and link to /log
/overlay        → JSON array of the diagnostics-panel lines
/state          → JSON copy of the current display state
/diag, /data    → JSON object of poll, video, image and process health
/action?cmd=…   → inject control commands (refresh, overlay, fullscreen, quit)
/log            → contents of the runtime log (if present)

The server thread never touches the display directly: it reads, or posts
actions for the main loop to carry out.
"""

from __future__ import annotations
import http.server
import json
import logging
import platform
import socketserver
import threading
import time
import traceback
import urllib.parse
from typing import TYPE_CHECKING, Any

import psutil

import config
from events import EventManager
from overlays import overlay_lines

if TYPE_CHECKING:                       # avoid circular import at runtime
    from app import SignageApp

log = logging.getLogger(__name__)

# ── diagnostics refresh cadence ───────────────────────────────────────────
_last_diag_time = 0.0
_diag_interval  = config.DIAG_REFRESH_INTERVAL

# ── global diagnostic store ───────────────────────────────────────────────
monitor_data: dict[str, Any] = {
    "script_uptime":     "0d 00:00:00",
    "machine_uptime":    "0d 00:00:00",
    "process_rss":       "0 MB",
    "polls":             0,
    "poll_failures":     0,
    "render_errors":     0,
    "last_success":      "",
    "last_error":        "",
    "video_src":         "",
    "video_loads":       0,
    "images_cached":     0,
    "images_pending":    0,
    "image_errors":      0,
    "last_http_crash":   "",
    "python_version":    platform.python_version(),
}

_script_start = time.monotonic()
_boot_time    = psutil.boot_time()
_process      = psutil.Process()

# remote command → action type
COMMANDS = {
    "refresh":    "refresh",
    "overlay":    "toggle_overlay",
    "fullscreen": "toggle_fullscreen",
    "quit":       "quit",
}


# ── helpers ────────────────────────────────────────────────────────────────
def _fmt_duration(secs: float) -> str:
    d, rem = divmod(int(secs), 86400)
    h, rem = divmod(rem, 3600)
    m, s   = divmod(rem, 60)
    return f"{d}d {h:02}:{m:02}:{s:02}"


def _maybe_update_diagnostics(app: "SignageApp") -> None:
    global _last_diag_time
    now = time.monotonic()
    if now - _last_diag_time >= _diag_interval:
        _last_diag_time = now
        _update_diagnostics(app)


def _update_diagnostics(app: "SignageApp") -> None:
    """Refresh uptimes, memory and the display's poll/video/image health."""
    now = time.monotonic()
    monitor_data["script_uptime"]  = _fmt_duration(now - _script_start)
    monitor_data["machine_uptime"] = _fmt_duration(time.time() - _boot_time)
    monitor_data["process_rss"]    = f"{_process.memory_info().rss // 1024**2} MB"

    poller = app.poller
    monitor_data["polls"]         = poller.polls
    monitor_data["poll_failures"] = poller.failures
    monitor_data["render_errors"] = poller.render_errors
    monitor_data["last_success"]  = (poller.last_success.isoformat(timespec="seconds")
                                     if poller.last_success else "")
    monitor_data["last_error"]    = poller.last_error
    monitor_data["video_src"]     = app.display.video_src
    monitor_data["video_loads"]   = app.display.video_loads

    images = getattr(app, "images", None)
    if images is not None:
        monitor_data["images_cached"]  = len(images)
        monitor_data["images_pending"] = images.pending
        monitor_data["image_errors"]   = images.errors


# ── reusable threaded HTTP server ──────────────────────────────────────────
class ReusableTCPServer(socketserver.ThreadingMixIn, http.server.HTTPServer):
    daemon_threads      = True
    allow_reuse_address = True


# ── request handler ────────────────────────────────────────────────────────
class RemoteHandler(http.server.BaseHTTPRequestHandler):
    def log_message(self, fmt, *args):
        log.debug("%s - %s", self.address_string(), fmt % args)

    def do_GET(self):
        parsed = urllib.parse.urlparse(self.path)
        path, qs = parsed.path, parsed.query
        app: "SignageApp" = self.server.app      # type: ignore[attr-defined]

        if path == "/":
            return self._serve_html()
        if path == "/overlay":
            return self._serve_json(overlay_lines(app.poller, app.started))
        if path == "/state":
            return self._serve_json(app.display.as_dict())
        if path in ("/diag", "/data"):
            _maybe_update_diagnostics(app)
            return self._serve_json(monitor_data)
        if path == "/log":
            return self._serve_log()
        if path == "/action":
            return self._serve_action(qs)

        self.send_error(404, "Not found")

    # ── helpers for each route ───────────────────────────────────────────
    def _serve_html(self):
        b = HTML_PAGE.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(b)))
        self.end_headers()
        self.wfile.write(b)

    def _serve_json(self, obj: Any):
        b = json.dumps(obj, default=str).encode("utf-8")
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
        qs = urllib.parse.parse_qs(query)
        cmd = qs.get("cmd", [""])[0]

        action = COMMANDS.get(cmd)
        if action is None:
            return self.send_error(400, "Unknown cmd")
        log.info("remote command: %s", cmd)
        EventManager.post({"type": action})

        self.send_response(204)
        self.end_headers()


# ── simple HTML UI ─────────────────────────────────────────────────────────
HTML_PAGE = """
<!doctype html><html><head><meta charset="utf-8">
<title>Signage Remote & Diagnostics</title>
<style>
 body{background:#000;color:#0f0;font-family:monospace;padding:1em;}
 a.button{display:inline-block;margin:4px;padding:6px 12px;border:1px solid #0f0;
          text-decoration:none;color:#0f0;}
 pre{margin:0.5em 0;font-family:monospace;}
</style></head><body>
<h2>Signage Display Remote</h2>
<a class="button" href="/action?cmd=refresh">Refresh now</a>
<a class="button" href="/action?cmd=overlay">Toggle overlay</a>
<a class="button" href="/action?cmd=fullscreen">Toggle fullscreen</a>
<a class="button" href="/action?cmd=quit">Quit</a>
<a class="button" href="/state">Display state</a>
<a class="button" href="/log">View log</a>

<div><h3>Status</h3><pre id="overlay"></pre></div>
<div><h3>Diagnostics</h3><pre id="diag"></pre></div>

<script>
 async function refreshUI(){
   try {
     let o  = await fetch('/overlay'); let ov = await o.json();
     document.getElementById('overlay').textContent = ov.join('\\n');
     let d  = await fetch('/diag');    let dg = await d.json();
     let txt = '';
     for (let [k,v] of Object.entries(dg)){
       txt += k.padEnd(20,' ') + v + '\\n';
     }
     document.getElementById('diag').textContent = txt;
   } catch(e){
     console.error(e);
   }
 }
 setInterval(refreshUI, 1000);
 refreshUI();
</script>
</body></html>
"""


# ── server bootstrap with auto-restart ────────────────────────────────────
def start(app: "SignageApp", port: int = config.WEB_PORT) -> threading.Thread:
    def _serve_loop():
        while True:
            try:
                with ReusableTCPServer(("", port), RemoteHandler) as httpd:
                    httpd.app = app
                    httpd.serve_forever()
            except Exception:
                monitor_data["last_http_crash"] = traceback.format_exc()
                log.exception("web remote crashed, restarting")
                time.sleep(1)

    t = threading.Thread(target=_serve_loop, daemon=True, name="web-remote")
    t.start()
    log.info("web remote & diagnostics listening on port %d", port)
    return t
