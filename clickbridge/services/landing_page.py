from html import escape
from string import Template

from clickbridge.services.landing import LandingVisit

# $-placeholders are substituted with HTML-escaped values only
_LANDING_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta name="robots" content="noindex, nofollow">
  <title>Open WhatsApp</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif;
      background: linear-gradient(135deg, #075e54 0%, #128c7e 100%);
      min-height: 100vh; display: flex; align-items: center; justify-content: center;
      padding: 20px;
    }
    .container {
      background: #fff; border-radius: 16px; padding: 32px 24px;
      max-width: 400px; width: 100%; text-align: center;
      box-shadow: 0 10px 40px rgba(0, 0, 0, 0.2);
    }
    h1 { color: #1a1a1a; font-size: 22px; margin-bottom: 8px; }
    .subtitle { color: #666; font-size: 14px; margin-bottom: 24px; }
    .cta-button {
      display: block; background: #25d366; color: #fff; border-radius: 12px;
      padding: 16px 24px; font-size: 18px; font-weight: 600; text-decoration: none;
    }
    .message-preview { background: #f5f5f5; border-radius: 8px; padding: 12px 16px; margin: 20px 0; text-align: left; }
    .message-preview-label { color: #888; font-size: 11px; text-transform: uppercase; margin-bottom: 6px; }
    .message-preview-text { color: #333; font-size: 14px; word-break: break-word; }
    .copy-button { background: none; border: 1px solid #ddd; color: #666; border-radius: 6px; padding: 8px 16px; cursor: pointer; margin-top: 8px; }
    .ref { color: #aaa; font-size: 11px; margin-top: 16px; }
  </style>
</head>
<body>
  <div class="container">
    <h1>Continue on WhatsApp</h1>
    <p class="subtitle">Tap the button below to start the chat.</p>
    <a id="cta" class="cta-button" href="$https_url" data-deep-link="$deep_link_url">Open WhatsApp</a>
    <div class="message-preview">
      <div class="message-preview-label">Your message</div>
      <div id="message" class="message-preview-text">$message_text</div>
      <button id="copy" class="copy-button" type="button">Copy message</button>
    </div>
    <p class="ref">Ref: $cid</p>
  </div>
  <script>
    (function () {
      var cta = document.getElementById('cta');
      cta.addEventListener('click', function (event) {
        var deepLink = cta.getAttribute('data-deep-link');
        if (!/Android|iPhone|iPad|iPod/i.test(navigator.userAgent)) { return; }
        event.preventDefault();
        var fallback = setTimeout(function () { window.location.href = cta.href; }, 1500);
        window.addEventListener('pagehide', function () { clearTimeout(fallback); });
        window.location.href = deepLink;
      });
      document.getElementById('copy').addEventListener('click', function () {
        var text = document.getElementById('message').textContent;
        if (navigator.clipboard) {
          navigator.clipboard.writeText(text).then(function () {
            document.getElementById('copy').textContent = 'Copied';
          });
        }
      });
    })();
  </script>
</body>
</html>
""")

INFO_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>X to WhatsApp Bridge</title>
</head>
<body>
  <h1>X to WhatsApp Bridge</h1>
  <p>This service handles X/Twitter ad redirects to WhatsApp.</p>
</body>
</html>
"""


def render_landing_page(visit: LandingVisit) -> str:
    return _LANDING_TEMPLATE.substitute(
        https_url=escape(visit.urls.https_url),
        deep_link_url=escape(visit.urls.deep_link_url),
        message_text=escape(visit.urls.message_text),
        cid=escape(visit.cid),
    )
