"""Product List HTML — browser rendering of the catalog for Accept: text/html.

Invariants:
    - Every product field is HTML-escaped
    - Pure function over domain records; the JSON listing is unaffected
"""

from html import escape

from stockroom.core.domain_types import ProductRecord

_PAGE = """<!doctype html>
<html lang="pt-BR">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Produtos • API de Estoque</title>
    <style>
      body{{margin:0;background:#0f172a;color:#e5e7eb;font:14px system-ui,sans-serif}}
      .wrap{{max-width:960px;margin:40px auto;padding:0 16px}}
      table{{width:100%;border-collapse:collapse}}
      th,td{{padding:12px 14px;border-bottom:1px solid #1f2937;text-align:left}}
      th{{color:#9ca3af}}
      code{{color:#22d3ee}}
      a{{color:#22d3ee;margin-right:16px}}
    </style>
  </head>
  <body>
    <div class="wrap">
      <h1>Produtos (API de Estoque)</h1>
      <p>
        <a href="/api/health">/api/health</a>
        <a href="/docs">/docs</a>
        <a href="/api/stock?sku=IPHN-15-PNK">/api/stock?sku=...</a>
      </p>
      <table>
        <thead><tr><th>ID</th><th>SKU</th><th>Nome</th><th>Estoque</th></tr></thead>
        <tbody>
{rows}
        </tbody>
      </table>
    </div>
  </body>
</html>
"""


def wants_html(accept_header: str | None) -> bool:
    return "text/html" in (accept_header or "")


def render_product_table(products: list[ProductRecord]) -> str:
    rows = "\n".join(
        "          <tr>"
        f"<td>{p.id}</td><td><code>{escape(p.sku)}</code></td>"
        f"<td>{escape(p.name)}</td><td>{p.stock}</td>"
        "</tr>"
        for p in products
    )
    return _PAGE.format(rows=rows)
