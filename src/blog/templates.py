"""HTML templates for standalone document output."""

from string import Template

BLOG_CSS = """\
  * { margin: 0; padding: 0; box-sizing: border-box; }
  body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', sans-serif; font-size: 16px; line-height: 1.6; color: #222; background-color: #fff; }
  .blog-container { max-width: 800px; margin: 0 auto; padding: 40px 20px; }
  h1 { font-size: 2.5rem; font-weight: 800; line-height: 1.2; margin-bottom: 30px; color: #1a1a1a; }
  h2 { font-size: 2rem; font-weight: 700; line-height: 1.3; margin-top: 45px; margin-bottom: 20px; border-bottom: 3px solid #2563eb; padding-bottom: 12px; }
  h3 { font-size: 1.5rem; font-weight: 700; margin-top: 30px; margin-bottom: 15px; color: #2563eb; }
  p { margin-bottom: 18px; line-height: 1.8; color: #444; }
  a { color: #2563eb; }
  img { max-width: 100%; height: auto; display: block; margin: 30px 0; border-radius: 8px; }
  ul, ol { margin-bottom: 24px; margin-left: 30px; }
  li { margin-bottom: 12px; line-height: 1.8; color: #444; }
  dt { font-weight: 700; color: #2563eb; margin-top: 20px; margin-bottom: 8px; }
  dd { margin-left: 0; margin-bottom: 16px; color: #555; line-height: 1.8; }
  .byline { color: #666; font-size: 0.95rem; }
  .brand-promotion { border: 2px solid #2563eb; border-radius: 12px; padding: 30px; margin: 40px 0; }
  .brand-promotion h3 { margin-top: 0; }
"""

DOCUMENT = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>${title}</title>
<meta name="description" content="${description}">
<meta name="keywords" content="${keywords}">
<meta property="og:type" content="article">
<meta property="og:title" content="${title}">
<meta property="og:description" content="${description}">
${extra_meta}<style>
${css}</style>
</head>
<body>
<article class="blog-container">
${content}
</article>
</body>
</html>
""")
