"""Shared test fixtures and utilities."""

import pytest
import requests

from bulletin_stats.config import RunConfig
from bulletin_stats.models import BulletinReference

MANIFEST_URL = 'https://www.chinacdc.cn/jkzt/crb/zl/szkb_11803/jszl_13141/'
FIRST_LINK = MANIFEST_URL + '202301/t20230110_263000.html'
SECOND_LINK = MANIFEST_URL + '202301/t20230105_262900.html'
THIRD_LINK = 'https://www.chinacdc.cn/jkzt/crb/zl/t20221230_262800.html'

INDEX_HTML = """<html><head><meta charset="utf-8"></head><body>
<div class="main"><div class="cn-main"><div class="cn-main-right">
<div class="item-top">
  <div class="item-top-text"><a href="./202301/t20230110_263000.html"> 全国新型冠状病毒感染疫情情况 </a><span>发布时间：2023-01-10</span></div>
  <div class="item-bottom"><ul>
    <li><a href="./202301/t20230105_262900.html">全国新型冠状病毒感染疫情情况</a><span>[2023-01-05]</span></li>
    <li><a href="https://www.chinacdc.cn/jkzt/crb/zl/t20221230_262800.html#top">全国新型冠状病毒感染疫情情况</a><span>2022-12-30</span></li>
  </ul></div>
</div>
</div></div></div>
</body></html>"""

WELL_FORMED_PARAGRAPH = '10月5日新增感染3.5万人，检测阳性率10月6日为20.5%。'

BULLETIN_HTML = """<html><head><meta charset="utf-8"></head><body>
<div class="TRS_Editor"><div class="TRS_Editor">
<p>一、 概况</p>
<p>  10月5日 新增感染3.5万人，
   检测阳性率10月6日为20.5%。</p>
<p>11月1日新增感染1万人，检测阳性率11月2日为1%。</p>
</div></div>
</body></html>"""

NO_ANCHOR_HTML = """<html><head><meta charset="utf-8"></head><body>
<div class="TRS_Editor"><div class="TRS_Editor">
<p>本周无新增数据。</p>
</div></div>
</body></html>"""

MALFORMED_HTML = """<html><head><meta charset="utf-8"></head><body>
<div class="TRS_Editor"><div class="TRS_Editor">
<p>今日检测阳性率10月6日为20.5%。</p>
</div></div>
</body></html>"""


class TrackedResponse(requests.Response):
    """Response that records whether it was closed."""

    def __init__(self):
        super().__init__()
        self.closed = False

    def close(self):
        self.closed = True
        super().close()


def make_response(url, html, status_code=200):
    """Build an in-memory response for url with the given body."""
    response = TrackedResponse()
    response.status_code = status_code
    response.url = url
    response.reason = 'OK' if status_code == 200 else 'Not Found'
    response._content = html.encode('utf-8')
    response._content_consumed = True
    response.headers['Content-Type'] = 'text/html'
    return response


class FakeSession:
    """Stand-in for requests.Session serving pages from a dict."""

    def __init__(self, pages):
        self.pages = pages
        self.requested = []
        self.responses = []
        self.closed = False

    def get(self, url, timeout=None, **kwargs):
        self.requested.append(url)
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        if page is None:
            response = make_response(url, '', status_code=404)
        else:
            response = make_response(url, page)
        self.responses.append(response)
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def sample_config(tmp_path):
    """Create a sample configuration for tests."""
    return RunConfig(
        manifest_url=MANIFEST_URL,
        output_path=tmp_path / 'output' / 'stats.json',
        politeness_delay=0.0,
        request_timeout=5,
    )


@pytest.fixture
def sample_post():
    """Sample bulletin reference."""
    return BulletinReference(
        title='全国新型冠状病毒感染疫情情况',
        date='2023-01-10',
        link=FIRST_LINK,
    )


@pytest.fixture
def site_pages():
    """Index page plus one well-formed bulletin and one without statistics."""
    return {
        MANIFEST_URL: INDEX_HTML,
        FIRST_LINK: BULLETIN_HTML,
        SECOND_LINK: NO_ANCHOR_HTML,
        THIRD_LINK: BULLETIN_HTML,
    }
