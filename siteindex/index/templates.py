"""Jinja2 templates for the XML artifacts."""

from __future__ import annotations

from functools import lru_cache

from jinja2 import DictLoader, Environment, select_autoescape
from markupsafe import Markup

SITEMAP_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9" xmlns:xhtml="http://www.w3.org/1999/xhtml">
{%- for url in urls %}
  <url>
    <loc>{{ url.loc }}</loc>
    {%- if url.lastmod %}
    <lastmod>{{ url.lastmod }}</lastmod>
    {%- endif %}
  </url>
{%- endfor %}
</urlset>
"""

RSS_TEMPLATE = """<?xml version="1.0" encoding="UTF-8" ?>
<rss version="2.0">
  <channel>
    <title>{{ title }}</title>
    <link>{{ link }}</link>
    <description>{{ description }}</description>
    <generator>{{ generator }}</generator>
{%- for item in items %}
    <item>
      <title>{{ item.title }}</title>
      <link>{{ item.link }}</link>
      <guid>{{ item.link }}</guid>
      <description><![CDATA[ {{ item.body|cdata }} ]]></description>
      {%- if item.pub_date %}
      <pubDate>{{ item.pub_date }}</pubDate>
      {%- endif %}
    </item>
{%- endfor %}
  </channel>
</rss>
"""


def cdata(value: str | None) -> Markup:
    """Mark text for a CDATA section, splitting any literal ``]]>``.

    The value bypasses autoescaping and lands in the document as-is, so
    HTML must already be escaped (``render_rich_content`` does this).
    """
    return Markup((value or "").replace("]]>", "]]]]><![CDATA[>"))


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    env = Environment(
        loader=DictLoader({
            "sitemap.xml": SITEMAP_TEMPLATE,
            "rss.xml": RSS_TEMPLATE,
        }),
        autoescape=select_autoescape(["html", "xml"]),
    )
    env.filters["cdata"] = cdata
    return env


__all__ = ["get_environment", "cdata"]
