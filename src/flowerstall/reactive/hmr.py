"""Live reload script — injected into every rendered page.

The script opens a websocket to the reload channel on the page's own host and
reloads the page when a ``reload`` message arrives.  If the connection drops
(server restarting, port briefly unavailable) it retries every second.
Only pages rendered while the channel is listening carry the script.
"""

from __future__ import annotations

# ``{port}`` is filled in per page; all other braces are doubled for str.format.
_RELOAD_SCRIPT = """\
<script data-flowerstall-reload>
(function() {{
  var port = {port};
  var scheme = location.protocol === 'https:' ? 'wss://' : 'ws://';
  function connect() {{
    var ws = new WebSocket(scheme + location.hostname + ':' + port + '/');
    ws.onmessage = function(e) {{
      var msg;
      try {{ msg = JSON.parse(e.data); }} catch (x) {{ return; }}
      if (msg && msg.type === 'reload') location.reload();
    }};
    ws.onclose = function() {{
      setTimeout(connect, 1000);
    }};
  }}
  connect();
}})();
</script>
"""


def reload_script(port: int | None) -> str:
    """Return the script tag for a channel on *port*, or ``""`` when disabled."""
    if port is None or port <= 0:
        return ""
    return _RELOAD_SCRIPT.format(port=int(port))
