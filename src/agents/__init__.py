"""
Pipeline stages for the G2 review scraper.

- Content normalization (survey questions stripped)
- Response translation (G2 item -> Review)
- G2 API client (HTTP, rate-limit retry)
- Mock review generator (fallback data)
"""
