"""Shared test fixtures."""
import pytest

from flipkart_scraper.config import ScraperSettings


PRODUCT_HTML = """
<html>
<head>
  <title>SAMSUNG Galaxy F13 - Buy Online</title>
  <link rel="canonical" href="https://www.flipkart.com/samsung-galaxy-f13/p/itm583ef432b2b0c?pid=MOBGENJWBZFPZDRH&lid=LST123&marketplace=FLIPKART">
</head>
<body>
  <ul class="ZqtVYK">
    <li><img src="https://rukminim2.flixcart.com/image/128/128/f13-1.jpeg"></li>
    <li><img src="//rukminim2.flixcart.com/image/128/128/f13-2.jpeg"></li>
  </ul>
  <h1><span class="VU-ZEz">SAMSUNG Galaxy F13 (Waterfall Blue, 64 GB)</span></h1>
  <div class="XQDdHH">4.3<img src="data:image/svg+xml;base64,PHN2Zz4="></div>
  <span class="Wphh3N">1,23,456 Ratings &amp; 7,890 Reviews</span>
  <img src="https://static-assets-web.flixcart.com/fk-p-linchpin-web/fk-cp-zion/img/fa_62673a.png">
  <div class="Nx9bqj CxhGGd">₹11,999</div>
  <div class="yRaY8j A6+E6v">₹14,999</div>
  <div class="I+EQVr">
    <ul>
      <li>Bank Offer 10% off on Axis Bank Credit Card</li>
      <li>Partner Offer Sign up for Flipkart Pay Later</li>
    </ul>
  </div>
  <div class="xFVion">
    <ul>
      <li>4 GB RAM | 64 GB ROM</li>
      <li>16.76 cm (6.6 inch) Full HD+ Display</li>
    </ul>
  </div>
  <div id="sellerName"><span><span>RetailNet</span><div class="XQDdHH">4.5</div></span></div>
  <div class="_1UhVsV">
    <div class="_3k-BhJ">
      <div class="flxcaE">General</div>
      <table><tbody>
        <tr><td>Model Number</td><td>SM-E135FZBHINS</td></tr>
        <tr><td>Color</td><td><ul><li>Waterfall Blue</li></ul></td></tr>
        <tr><td>Broken row</td></tr>
      </tbody></table>
    </div>
    <div class="_3k-BhJ">
      <div class="flxcaE">Display Features</div>
      <table><tbody>
        <tr><td>Display Size</td><td>16.76 cm (6.6 inch)</td></tr>
      </tbody></table>
    </div>
  </div>
  <script>window.__INITIAL_STATE__ = {"pageDataV4":{"productId":"MOBGENJWBZFPZDRH","shareUrl":"https://dl.flipkart.com/s/abc123?cmpid=product.share.pp"}};</script>
</body>
</html>
"""

MINIMAL_PRODUCT_HTML = """
<html><body>
  <h1>Test Phone</h1>
  <div class="Nx9bqj">₹999</div>
</body></html>
"""

SEARCH_HTML = """
<html><body>
  <div data-id="MOB1">
    <a class="CGtC98" href="/samsung-galaxy-f13/p/itm1?pid=MOB1">
      <img class="DByuf4" src="https://rukminim2.flixcart.com/image/312/312/f13.jpeg">
      <div class="KzDlHZ">SAMSUNG Galaxy F13</div>
      <div class="Nx9bqj">₹11,999</div>
      <div class="yRaY8j">₹14,999</div>
    </a>
  </div>
  <div data-id="MOB2">
    <a class="CGtC98" href="https://www.flipkart.com/redmi-12/p/itm2?pid=MOB2">
      <div class="KzDlHZ">REDMI 12</div>
      <div class="Nx9bqj">₹9,499</div>
    </a>
  </div>
  <div data-id="MOB3">
    <a class="CGtC98" href="/upcoming-phone/p/itm3">
      <div class="KzDlHZ">Upcoming Phone</div>
      <div class="Nx9bqj">Price not available</div>
    </a>
  </div>
  <div data-id="MOB4">
    <div class="KzDlHZ">Orphan Card</div>
    <div class="Nx9bqj">₹100</div>
  </div>
</body></html>
"""


@pytest.fixture
def settings():
    return ScraperSettings()


@pytest.fixture
def product_html():
    return PRODUCT_HTML


@pytest.fixture
def minimal_product_html():
    return MINIMAL_PRODUCT_HTML


@pytest.fixture
def search_html():
    return SEARCH_HTML
