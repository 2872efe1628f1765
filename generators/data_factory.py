"""
LLM-powered sample catalog generator for the Resource Availability Engine.
STRATEGY: one request per category (resources, then bookings for those resources).
Every item is validated through the pydantic models; invalid items are skipped.
Without an API key the built-in seed catalog is used instead.
"""

import json
import logging
import re
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Tuple, Type

import google.generativeai as genai
from pydantic import BaseModel, ValidationError

from models import Booking, BookingStatus, ResourceDescriptor
from models.timeutils import weekday_index

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

# Sample catalog: a meeting room, a co-working space, equipment, a venue and a pod
SEED_RESOURCES: List[Dict[str, Any]] = [
    {
        "id": "1", "name": "Conference Room A",
        "durationMinutes": 60, "bufferTimeMinutes": 15, "price": 50,
        "operatingHours": {"start": "09:00", "end": "18:00"},
        "availableDays": [1, 2, 3, 4, 5],
    },
    {
        "id": "2", "name": "Creative Workspace",
        "durationMinutes": 240, "bufferTimeMinutes": 30, "price": 30,
        "operatingHours": {"start": "08:00", "end": "20:00"},
        "availableDays": [0, 1, 2, 3, 4, 5, 6],
    },
    {
        "id": "3", "name": "Projector & Screen Set",
        "durationMinutes": 120, "bufferTimeMinutes": 0, "price": 25,
        "operatingHours": {"start": "09:00", "end": "17:00"},
        "availableDays": [1, 2, 3, 4, 5],
    },
    {
        "id": "4", "name": "Event Hall",
        "durationMinutes": 480, "bufferTimeMinutes": 60, "price": 500,
        "operatingHours": {"start": "08:00", "end": "22:00"},
        "availableDays": [0, 1, 2, 3, 4, 5, 6],
    },
    {
        "id": "6", "name": "Quiet Pod",
        "durationMinutes": 60, "bufferTimeMinutes": 10, "price": 15,
        "operatingHours": {"start": "09:00", "end": "18:00"},
        "availableDays": [1, 2, 3, 4, 5],
    },
]

# Conference Room A's busy day: (booking id, start, end, status)
SEED_DAY_PATTERN: List[Tuple[str, time, time, BookingStatus]] = [
    ("b1", time(10, 0), time(11, 0), BookingStatus.CONFIRMED),
    ("b40", time(11, 30), time(12, 30), BookingStatus.CONFIRMED),
    ("b41", time(12, 45), time(13, 45), BookingStatus.CONFIRMED),
    ("b2", time(14, 0), time(15, 30), BookingStatus.CONFIRMED),
    ("b3", time(16, 0), time(17, 0), BookingStatus.CANCELLED),
]


def seed_catalog(start_date: Optional[date] = None) -> Tuple[List[ResourceDescriptor], List[Booking]]:
    """
    Deterministic sample catalog.
    Bookings land on the first weekday on/after start_date that Conference Room A is open.
    """
    if start_date is None: start_date = date.today()
    resources = [ResourceDescriptor(**item) for item in SEED_RESOURCES]
    room = resources[0]

    day = start_date
    while not room.is_open_on(weekday_index(day)):
        day += timedelta(days=1)

    bookings = [
        Booking(
            id=booking_id,
            resource_id=room.id,
            start_time=datetime.combine(day, start),
            end_time=datetime.combine(day, end),
            status=status,
        )
        for booking_id, start, end, status in SEED_DAY_PATTERN
    ]
    return resources, bookings


class DataGenerator:
    def __init__(self, api_key: Optional[str] = None, model_name: str = DEFAULT_MODEL):
        if not api_key:
            raise ValueError("Google API key not found. Please set GOOGLE_API_KEY in environment.")
        self.api_key = api_key

        genai.configure(api_key=self.api_key)
        self.model = genai.GenerativeModel(model_name)
        self.total_cost = 0.0

    def _estimate_cost(self, prompt_tokens: int, response_tokens: int) -> float:
        return (prompt_tokens * 0.075 + response_tokens * 0.30) / 1_000_000

    def _robust_parse_json(self, raw_text: str) -> List[Any]:
        """
        Handles Markdown stripping and shape normalization.
        """
        if not raw_text: return []

        # 1. Clean Markdown Code Blocks
        clean_text = re.sub(r"```json\s*|\s*```", "", raw_text).strip()

        try:
            data = json.loads(clean_text)
        except json.JSONDecodeError:
            # Fallback: Try to regex extract the main list
            match = re.search(r'(\[.*\])', clean_text, re.DOTALL)
            if not match:
                return []
            try:
                data = json.loads(match.group(1))
            except json.JSONDecodeError:
                return []

        # 2. Normalize Data Shape
        if isinstance(data, list): return data
        if isinstance(data, dict):
            for key in ['resources', 'bookings', 'result']:
                if key in data and isinstance(data[key], list):
                    return data[key]
            return [data]
        return []

    def _fetch_batch(self, prompt: str, model_class: Type[BaseModel]) -> Tuple[List[Any], float]:
        """
        Executes a generation request and validates every returned item.
        """
        try:
            generation_config = genai.GenerationConfig(
                response_mime_type="application/json",
                max_output_tokens=16000,
                temperature=0.7
            )
            response = self.model.generate_content(prompt, generation_config=generation_config)
        except Exception as e:
            # The SDK raises transport and quota errors from several modules
            logger.error(f"Batch Generation Failed: {e}")
            return [], 0.0

        cost = 0.0
        usage = getattr(response, 'usage_metadata', None)
        if usage is not None:
            cost = self._estimate_cost(usage.prompt_token_count, usage.candidates_token_count)
        self.total_cost += cost

        valid_items = []
        for i, item in enumerate(self._robust_parse_json(response.text)):
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object item {i} in batch")
                continue
            try:
                valid_items.append(model_class(**item))
            except ValidationError as e:
                logger.warning(f"Skipping invalid item {i} in batch: {e.json()}")

        return valid_items, cost

    def generate_resources(self, count: int = 5) -> Tuple[List[ResourceDescriptor], float]:
        prompt = f"""
        Generate {count} bookable resources (meeting rooms, workspaces, equipment, venues).
        OUTPUT: JSON Array.
        RULES:
        - "id": Must be a STRING (e.g., "R001").
        - "durationMinutes": INTEGER between 30 and 480.
        - "bufferTimeMinutes": INTEGER between 0 and 60.
        - "operatingHours": {{ "start": "HH:mm", "end": "HH:mm" }} with start before end.
        - "availableDays": list of integers 0-6 where 0=Sunday and 6=Saturday.
        - "price": number.
        FIELDS: id, name, durationMinutes, bufferTimeMinutes, operatingHours, availableDays, price.
        """
        logger.info(f"Generating {count} resources...")
        return self._fetch_batch(prompt, ResourceDescriptor)

    def generate_bookings(
        self,
        resources: List[ResourceDescriptor],
        per_resource: int = 6,
        start_date: Optional[date] = None
    ) -> Tuple[List[Booking], float]:
        if start_date is None: start_date = date.today()
        if not resources:
            return [], 0.0

        summary = json.dumps([
            {
                "id": r.id,
                "durationMinutes": r.duration_minutes,
                "operatingHours": r.operating_hours.model_dump(),
                "availableDays": r.available_days,
            }
            for r in resources
        ])

        prompt = f"""
        Generate {per_resource} bookings for EACH of these resources: {summary}
        All bookings fall within 30 days starting {start_date}.
        OUTPUT: JSON Array.
        RULES:
        - "resourceId": one of the ids above.
        - "startTime"/"endTime": local ISO timestamps "YYYY-MM-DDTHH:MM:00" without offset,
          on one of the resource's availableDays (0=Sunday), inside its operatingHours.
        - "status": one of ["confirmed", "pending", "cancelled", "completed", "no_show"].
        FIELDS: id, resourceId, startTime, endTime, status.
        """
        logger.info(f"Generating bookings for {len(resources)} resources...")
        return self._fetch_batch(prompt, Booking)

    def generate_catalog(
        self,
        resource_count: int = 5,
        start_date: Optional[date] = None
    ) -> Tuple[List[ResourceDescriptor], List[Booking], float]:
        resources, c1 = self.generate_resources(resource_count)
        bookings, c2 = self.generate_bookings(resources, start_date=start_date)
        return resources, bookings, c1 + c2
