"""
Test fixtures shared across all RTA tests.
"""

import pytest

from rta.models.finding_models import Finding
from rta.models.rule_models import Severity


@pytest.fixture
def item_list_tsx():
    """One list rendered without keys and one `any` annotation."""
    return '''\
import React from "react";

interface ListProps {
  items: string[];
}

export function ItemList({ items }: ListProps) {
  const selected: any = null;
  return (
    <ul>
      {items.map((item) => (
        <li>{item}</li>
      ))}
    </ul>
  );
}
'''


@pytest.fixture
def clean_tsx():
    """Well-behaved component that no recommended rule flags."""
    return '''\
import React, { useEffect, useState } from "react";

interface GreetingProps {
  name: string;
}

export function Greeting({ name }: GreetingProps) {
  const [count, setCount] = useState(0);

  useEffect(() => {
    document.title = `${name} (${count})`;
  }, [name, count]);

  return (
    <section>
      <h1>Hello {name}</h1>
      <img src="/avatar.png" alt="Avatar" />
    </section>
  );
}
'''


@pytest.fixture
def noisy_tsx():
    """Component with issues across several categories."""
    return '''\
import React, { useEffect, useMemo } from "react";

export const Dashboard = ({ users, onSelect }) => {
  const label = useMemo(() => "Users", []);

  useEffect(() => {
    console.log("mounted");
  });

  return (
    <div style={{ padding: 8 }}>
      <h1>{label}</h1>
      <h3>Details</h3>
      <img src="/logo.png" />
      <input type="text" />
      {users.sort().map((u) => <span>{u.name}</span>)}
      <button onClick={() => onSelect(null)}>Clear</button>
    </div>
  );
};
'''


@pytest.fixture
def make_finding():
    """Factory for findings with sensible defaults."""

    def _make(
        severity=Severity.WARNING,
        rule_id="typescript-any-usage",
        file="src/App.tsx",
        line=1,
        column=1,
        message="Avoid using 'any' type",
    ):
        return Finding(
            rule_id=rule_id,
            message=message,
            severity=severity,
            file=file,
            line=line,
            column=column,
        )

    return _make


@pytest.fixture
def project_dir(tmp_path, item_list_tsx):
    """A small project tree with a manifest, sources and ignored dirs."""
    (tmp_path / "package.json").write_text(
        '{"name": "demo-app", "version": "1.2.3",'
        ' "dependencies": {"react": "^18.2.0", "react-dom": "^18.2.0"},'
        ' "devDependencies": {"typescript": "^5.4.0"}}',
        encoding="utf-8",
    )
    src = tmp_path / "src"
    src.mkdir()
    (src / "ItemList.tsx").write_text(item_list_tsx, encoding="utf-8")
    (src / "styles.css").write_text("body { margin: 0; }", encoding="utf-8")

    vendored = tmp_path / "node_modules" / "lib"
    vendored.mkdir(parents=True)
    (vendored / "index.js").write_text("const x = useMemo(() => 1, []);", encoding="utf-8")
    return tmp_path
