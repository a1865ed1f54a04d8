"""
Mocker Kernel — Starter Templates

Documents offered when a new .moc file is created. Component bodies are
Mustache templates (chevron) filled with the component name, then wrapped
in a MocDocument and serialized so every new file carries the standard
header.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import chevron

from mocker.kernel.serializer import serialize_moc_file
from mocker.kernel.types import MocDocument, MocMemo, MocMetadata, TemplateInfo

DEFAULT_TEMPLATE_ID = "empty"


@dataclass(frozen=True)
class _Template:
    info: TemplateInfo
    intent: str
    imports: str
    body: str
    memos: tuple[tuple[str, str], ...] = field(default_factory=tuple)


_EMPTY_BODY = """\
export default function {{component_name}}() {
  return (
    <div className="min-h-screen bg-background p-8">
    </div>
  );
}"""

_LOGIN_FORM_IMPORTS = """\
import { Button } from "@/components/ui/button";
import { Input } from "@/components/ui/input";
import { Card, CardContent, CardHeader, CardTitle } from "@/components/ui/card";
import { Label } from "@/components/ui/label";"""

_LOGIN_FORM_BODY = """\
export default function {{component_name}}() {
  return (
    <div className="flex min-h-screen items-center justify-center bg-background">
      <Card className="w-full max-w-md">
        <CardHeader>
          <CardTitle className="text-2xl font-bold text-center">Login</CardTitle>
        </CardHeader>
        <CardContent className="flex flex-col gap-4">
          <div className="flex flex-col gap-2">
            <Label htmlFor="emailInput">Email</Label>
            <Input id="emailInput" type="email" placeholder="email@example.com" />
          </div>
          <div className="flex flex-col gap-2">
            <Label htmlFor="passwordInput">Password</Label>
            <Input id="passwordInput" type="password" placeholder="Enter password" />
          </div>
          <Button id="loginButton" variant="default" className="w-full">
            Login
          </Button>
        </CardContent>
      </Card>
    </div>
  );
}"""

_DASHBOARD_IMPORTS = """\
import { Card, CardContent, CardHeader, CardTitle } from "@/components/ui/card";
import { Button } from "@/components/ui/button";"""

_DASHBOARD_BODY = """\
export default function {{component_name}}() {
  return (
    <div className="flex min-h-screen bg-background">
      <aside id="sidebar" className="w-64 border-r bg-muted/40 p-4">
        <h2 className="text-lg font-semibold mb-4">Dashboard</h2>
        <nav className="flex flex-col gap-2">
{{#nav_items}}
          <Button variant="ghost" className="justify-start">{{.}}</Button>
{{/nav_items}}
        </nav>
      </aside>
      <main id="mainContent" className="flex-1 p-8">
        <h1 className="text-3xl font-bold mb-6">Dashboard</h1>
        <div className="grid grid-cols-3 gap-4">
{{#stats}}
          <Card>
            <CardHeader>
              <CardTitle>{{title}}</CardTitle>
            </CardHeader>
            <CardContent>
              <p className="text-3xl font-bold">{{value}}</p>
            </CardContent>
          </Card>
{{/stats}}
        </div>
      </main>
    </div>
  );
}"""

_DASHBOARD_DATA = {
    "nav_items": ["Home", "Analytics", "Settings"],
    "stats": [
        {"title": "Total Users", "value": "1,234"},
        {"title": "Revenue", "value": "$12,345"},
        {"title": "Active Sessions", "value": "567"},
    ],
}

_TEMPLATES: dict[str, _Template] = {
    "empty": _Template(
        info=TemplateInfo("empty", "Empty Page", "A blank canvas with a root container"),
        intent="Empty page",
        imports="",
        body=_EMPTY_BODY,
    ),
    "login-form": _Template(
        info=TemplateInfo("login-form", "Login Form", "A login form with email, password, and submit button"),
        intent="Login form mockup",
        imports=_LOGIN_FORM_IMPORTS,
        body=_LOGIN_FORM_BODY,
        memos=(
            ("loginButton", "Submit button for login action"),
            ("emailInput", "Email validation required"),
        ),
    ),
    "dashboard": _Template(
        info=TemplateInfo("dashboard", "Dashboard", "A dashboard layout with sidebar and content area"),
        intent="Dashboard layout mockup",
        imports=_DASHBOARD_IMPORTS,
        body=_DASHBOARD_BODY,
        memos=(
            ("sidebar", "Navigation sidebar with menu items"),
            ("mainContent", "Main content area for dashboard widgets"),
        ),
    ),
}


def get_templates() -> list[TemplateInfo]:
    return [t.info for t in _TEMPLATES.values()]


def get_template_document(template_id: str, component_name: str) -> MocDocument:
    """Build the starter document. Unknown ids fall back to the empty page."""
    template = _TEMPLATES.get(template_id) or _TEMPLATES[DEFAULT_TEMPLATE_ID]
    context = {"component_name": component_name, **_DASHBOARD_DATA}
    tsx_source = chevron.render(template.body, context)

    return MocDocument(
        metadata=MocMetadata(
            intent=template.intent,
            memos=[MocMemo(target_id=t, text=text) for t, text in template.memos],
        ),
        imports=template.imports,
        tsx_source=tsx_source,
    )


def get_template_content(template_id: str, component_name: str) -> str:
    """Full .moc text for a new file."""
    return serialize_moc_file(get_template_document(template_id, component_name))
