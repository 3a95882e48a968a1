"""HTML for the task and login pages.

User templates use Mechanical Turk style ``${field}`` placeholders. Two extra
fields are available that Mechanical Turk does not provide: ``ALL_JSON`` (the
whole task, pretty-printed and escaped) and ``ALL_JSON_RAW``.
"""

from __future__ import annotations

import html
import re
import textwrap
from typing import Iterable, Mapping, Optional

import orjson

from ..models import TaskStats

_PLACEHOLDER = re.compile(r"\$\{([^}]*)\}")

DEFAULT_LOGIN_PAGE = """<!doctype html>
<html>
<title>localturk</title>
<body>
<form action="/login-form" method="post">
  <p><span style="color: red">${message}</span></p>
  <label>User ID <input type="text" name="uid" autofocus></label>
  <input type="submit" value="Start">
</form>
</body>
</html>
"""

_KEYBOARD_SCRIPT = """<script>
// Support keyboard shortcuts via, e.g. <.. data-key="1" />
window.addEventListener("keydown", function(e) {
  if (document.activeElement !== document.body) return;
  var key = e.key;
  const el = document.querySelector('[data-key="' + key + '"]');
  if (el) {
    e.preventDefault();
    el.click();
  }
});
</script>"""


WORKER_FIELD = "uid"


def worker_field(task_columns: Iterable[str]) -> str:
    """Form field carrying the worker id; renamed when a task column is already called that."""
    if WORKER_FIELD in set(task_columns):
        return f"worker_{WORKER_FIELD}"
    return WORKER_FIELD


def html_entities(value: str) -> str:
    return html.escape(str(value), quote=True)


def render_template(template: str, values: Mapping[str, str]) -> str:
    def sub(m: re.Match) -> str:
        key = m.group(1)
        return values[key] if key in values else m.group(0)

    return _PLACEHOLDER.sub(sub, template)


def render_task_page(template: str, stats: TaskStats, uid: str, flash: Optional[str] = None) -> str:
    task = stats.task or {}
    full = {k: html_entities(v) for k, v in task.items()}
    full["ALL_JSON"] = html_entities(orjson.dumps(task, option=orjson.OPT_INDENT_2).decode())
    full["ALL_JSON_RAW"] = orjson.dumps(task).decode()
    user_html = render_template(template, full)

    source_inputs = "\n".join(
        f'<input type=hidden name="{html_entities(k)}" value="{html_entities(v)}">'
        for k, v in task.items()
    )
    progress = f"{stats.num_completed} / {stats.num_total}"
    safe_uid = html_entities(uid)
    worker_name = html_entities(worker_field(task))

    return textwrap.dedent("""\
        <!doctype html>
        <html>
        <title>{progress} - localturk</title>
        <body><form action=/submit method=post>
        <nav>
        <div class="nav-wrapper">
          <span class="brand-logo center">{progress}</span>
          <ul class="right">
          <li>{uid}</li>
          <li><a href="/">close</a></li>
          </ul>
        </div>
        </nav>
        <div class="container">
        <p><span style="background: yellow">{flash}</span></p></div>
        """).format(progress=progress, uid=safe_uid, flash=flash or "") + "\n".join([
        source_inputs,
        user_html,
        "<hr/>",
        f'<input type="hidden" name="{worker_name}" value="{safe_uid}"/>',
        '<div class="container"><input type=submit value="submit" /></div>',
        "</form>",
        _KEYBOARD_SCRIPT,
        "</body>",
        "</html>",
        "",
    ])


def render_login_page(page: str, message: str = "") -> str:
    return render_template(page, {"message": html_entities(message)})


def make_template(columns: Iterable[str]) -> str:
    """Stub template listing every task column, to be edited by hand."""
    columns = list(columns)
    rows = "\n".join(f"  <tr><th>{html_entities(c)}</th><td>${{{c}}}</td></tr>" for c in columns)
    return textwrap.dedent("""\
        <!--
          Fields from the task CSV are available as ${{column}} placeholders.
          Every <input> needs a "name" attribute or its value is not recorded.
          Full task as JSON: ${{ALL_JSON}}
        -->
        <table>
        {rows}
        </table>

        <p>
          <label><input type="radio" name="answer" value="yes" data-key="y"> Yes (y)</label>
          <label><input type="radio" name="answer" value="no" data-key="n"> No (n)</label>
        </p>
        <textarea name="notes" placeholder="Notes"></textarea>
        """).format(rows=rows)
