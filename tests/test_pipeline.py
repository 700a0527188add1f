"""End-to-end tests for the extraction pipeline."""

import json
import logging

import pytest
from bulletin_stats.errors import MalformedBulletinError
from bulletin_stats.extractor import StatisticsExtractor
from bulletin_stats.pipeline import RunContext, process_bulletin, run_pipeline
from bulletin_stats.source import BulletinSource

from conftest import (
    FIRST_LINK,
    MALFORMED_HTML,
    SECOND_LINK,
    THIRD_LINK,
    FakeSession,
)


class TestRunPipeline:
    
    def test_preserves_order_and_marks_misses(self, sample_config, site_pages, caplog):
        source = BulletinSource(sample_config, session=FakeSession(site_pages))
        
        with caplog.at_level(logging.WARNING):
            records = run_pipeline(sample_config, source=source)
        
        assert [r.post.link for r in records] == [FIRST_LINK, SECOND_LINK, THIRD_LINK]
        assert records[0].data.count == 35000
        assert records[0].data.count_date == '10月5日'
        assert records[1].data is None
        assert records[2].data is not None
        assert f"No count found for 2023-01-05: {SECOND_LINK}" in caplog.text
    
    def test_writes_output_file(self, sample_config, site_pages):
        source = BulletinSource(sample_config, session=FakeSession(site_pages))
        run_pipeline(sample_config, source=source)
        
        with open(sample_config.output_path, encoding='utf-8') as f:
            data = json.load(f)
        
        assert len(data) == 3
        assert data[0]['data'] == {
            'count': 35000,
            'countDate': '10月5日',
            'positivePercent': '20.5%',
            'positivePercentDate': '10月6日',
        }
        assert data[0]['post']['date'] == '2023-01-10'
        assert data[1]['data'] is None
    
    def test_skip_writing(self, sample_config, site_pages):
        source = BulletinSource(sample_config, session=FakeSession(site_pages))
        run_pipeline(sample_config, source=source, write_output=False)
        assert not sample_config.output_path.exists()
    
    def test_limit(self, sample_config, site_pages):
        sample_config.limit = 1
        session = FakeSession(site_pages)
        records = run_pipeline(sample_config, source=BulletinSource(sample_config, session=session))
        
        assert len(records) == 1
        assert SECOND_LINK not in session.requested
    
    def test_processes_bulletins_sequentially(self, sample_config, site_pages):
        session = FakeSession(site_pages)
        run_pipeline(sample_config, source=BulletinSource(sample_config, session=session))
        
        # Every page is released before the next one is requested
        assert all(r.closed for r in session.responses)
        assert session.requested[1:] == [FIRST_LINK, SECOND_LINK, THIRD_LINK]
    
    def test_malformed_bulletin_aborts_run(self, sample_config, site_pages):
        site_pages[SECOND_LINK] = MALFORMED_HTML
        session = FakeSession(site_pages)
        
        with pytest.raises(MalformedBulletinError) as exc_info:
            run_pipeline(sample_config, source=BulletinSource(sample_config, session=session))
        
        assert exc_info.value.link == SECOND_LINK
        assert session.responses[-1].closed
        assert THIRD_LINK not in session.requested
        assert not sample_config.output_path.exists()
    
    def test_caller_owned_source_stays_open(self, sample_config, site_pages):
        session = FakeSession(site_pages)
        run_pipeline(sample_config, source=BulletinSource(sample_config, session=session))
        assert not session.closed


class TestProcessBulletin:
    
    def test_miss_is_recorded_in_context(self, sample_config, site_pages, sample_post):
        source = BulletinSource(sample_config, session=FakeSession(site_pages))
        context = RunContext(
            config=sample_config,
            source=source,
            extractor=StatisticsExtractor(sample_config.extractor_settings()),
        )
        miss = sample_post.__class__(title='t', date='2023-01-05', link=SECOND_LINK)
        
        hit = process_bulletin(context, sample_post)
        missed = process_bulletin(context, miss)
        
        assert hit.data is not None
        assert missed.data is None
        assert context.misses == [miss]
