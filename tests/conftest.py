"""Shared test fixtures for sportsnews-extractor tests."""

import pytest

from sportsnews_extractor.config import Settings

DESCRIPTION_200 = ("The Kings closed out a tight road trip with a win. " * 4)[:200]


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def description_200() -> str:
    return DESCRIPTION_200


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        cache_backend="memory",
        article_cache_ttl=3600,
        failure_cache_ttl=60,
        backoff_multiplier=0,
        backoff_min=0,
        backoff_max=0,
        max_attempts=3,
    )


@pytest.fixture
def sicom_html() -> str:
    """si.com article: text, a tweet, a dropped relative embed, a stop heading."""
    return """
    <html><head>
    <meta property="og:url" content="https://www.si.com/nfl/home-team-wins">
    <meta property="og:title" content="  Big Win For The Home Team ">
    <meta property="og:description" content="Short desc.">
    <meta property="og:image" content="https://images.si.com/hero.jpg">
    </head><body>
    <p data-mm-id="p1">The home team won a thrilling game on Sunday night.</p>
    <p data-mm-id="p2">Their quarterback threw for three touchdowns.</p>
    <p data-mm-id="p3"><a href="/box-score">Read the full box score here now</a></p>
    <p data-mm-id="p4">Don’t miss out on any news about the team this season.</p>
    <p data-mm-id="p5">Go team go</p>
    <figure data-mm-id="f1">
      <blockquote class="twitter-tweet">
        <p>What a finish tonight</p>
        <a href="https://twitter.com/hometeam">@hometeam</a>
        <a href="https://twitter.com/hometeam/status/12345?ref_src=twsrc%5Etfw">May 1, 2024</a>
      </blockquote>
    </figure>
    <p data-mm-id="p6">After the game the coach praised the defense heavily.</p>
    <figure data-mm-id="f2"><a href="/fan/status/999">relative tweet</a></figure>
    <p data-mm-id="p7">For more coverage of the draft, read coverage from our partners.</p>
    <h2 data-mm-id="h1">How to watch the next game</h2>
    <p data-mm-id="p8">This paragraph comes after the stop marker.</p>
    <figure data-mm-id="f3">
      <a href="https://twitter.com/hometeam/status/777">late tweet</a>
    </figure>
    </body></html>
    """


@pytest.fixture
def sactown_html() -> str:
    """sactownsports.com story body with a YouTube player in <noscript>."""
    return f"""
    <html><head>
    <meta property="og:url" content="https://www.sactownsports.com/kings-win">
    <meta property="og:title" content="Kings win on the road">
    <meta property="og:description" content="{DESCRIPTION_200}">
    <meta property="og:image" content="https://www.sactownsports.com/kings.jpg">
    </head><body>
    <div class="story_body">
      <p>First paragraph about the Kings.</p>
      <p>Second paragraph.</p>
      <noscript><iframe src="https://www.youtube.com/embed/abc123?feature=oembed" width="560"></iframe></noscript>
      <p>Third paragraph after the video.</p>
      <noscript><iframe src="/relative/embed"></iframe></noscript>
      <p>Read more below: other Kings stories</p>
      <p>After the stop marker.</p>
    </div>
    </body></html>
    """


@pytest.fixture
def hail_html() -> str:
    """hailfloridahail.com article with a tweet, a heading and UI chrome."""
    return """
    <html><head>
    <title>Page title</title>
    <link rel="canonical" href="https://hailfloridahail.com/2024/gators-roll">
    <meta property="og:image" content="https://cdn.example.com/og.jpg">
    </head><body>
    <main><article>
      <h1>Gators Roll Past Rivals</h1>
      <div>Florida dominated from start to finish.</div>
      <img src="https://cdn.example.com/hero.jpg" alt="hero">
      <p data-mm-id="1">Florida opened the scoring early in the first quarter.</p>
      <blockquote class="twitter-tweet">
        <p data-mm-id="t1">What a play by the Gators tonight!</p>
        <a href="https://twitter.com/gators">@gators</a>
        <a href="https://twitter.com/gators/status/42?ref_src=twsrc">Link</a>
      </blockquote>
      <h2 data-mm-id="2">Defense Steps Up</h2>
      <p data-mm-id="3">The defense forced three turnovers in the second half.</p>
      <p data-mm-id="4">Share this article with friends</p>
      <p data-mm-id="5">Stay tuned for more updates.</p>
      <p data-mm-id="6">Short</p>
      <h3 data-mm-id="7">Related: next week's opponent</h3>
      <p>Unmarked paragraph that only a lenient pass would see.</p>
    </article></main>
    </body></html>
    """


@pytest.fixture
def hail_fallback_html() -> str:
    """No data-mm-id markers at all: only the lenient pass finds text."""
    return """
    <html><head><title>Fallback</title></head><body>
    <main>
      <p>Plain paragraph one without markers.</p>
      <p>tiny</p>
      <p>Follow along with our live blog today.</p>
      <p>Plain paragraph two is also unmarked.</p>
    </main>
    </body></html>
    """
