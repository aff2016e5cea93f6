"""
Prompt templates for the LLM-backed advisors.

Templates are plain format strings; builders live in llm_advisor.py.
"""

POI_SYSTEM_PROMPT = (
    "You are a travel expert who recommends points of interest. "
    "You always answer with a single valid JSON object and nothing else."
)

POI_USER_PROMPT = """Suggest {min_count}-{max_count} interesting points of interest for a {trip_days}-day trip to {destination}.

Return ONLY valid JSON in this format:
{{
  "pois": [
    {{
      "name": "POI Name",
      "description": "2-3 sentence description of why it's worth visiting",
      "category": "museum|landmark|park|restaurant|market|historical|natural|entertainment",
      "lat": 48.8584,
      "lng": 2.2945
    }}
  ]
}}

Requirements:
- Include a mix of categories
- Provide accurate latitude/longitude coordinates
- Descriptions should be engaging and specific
- Focus on popular, accessible attractions suitable for tourists
- Spread across different areas of {destination}"""

TRANSPORT_SYSTEM_PROMPT = (
    "You are a travel expert who picks the most practical primary mode of "
    "transportation between two places. You always answer with a single "
    "valid JSON object and nothing else."
)

TRANSPORT_USER_PROMPT = """Determine the most appropriate transportation mode for a trip from {origin} to {destination}.

Distance: {distance_km:.1f} km ({distance_miles:.1f} miles)

Consider:
- Distance: Short (< 100 km), Medium (100-500 km), Long (500-2000 km), Very Long (> 2000 km)
- Geography: bodies of water, mountains, or other obstacles
- Typical transportation options for this route
- Cost and time efficiency
- Availability of infrastructure (airports, train stations, highways)

Choose one of: {modes}
- plane: long distances or when significantly faster
- train: medium to long distances with good rail infrastructure
- bus: short to medium distances, budget-friendly
- car: short to medium distances with flexibility needs
- ferry: crossing significant bodies of water
- combination: when multiple modes are typically needed

Return ONLY valid JSON: {{"mode": "<one of the modes>", "reasoning": "<brief explanation>"}}"""
