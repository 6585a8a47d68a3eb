from sqlalchemy import Column, String, Integer, DateTime, Text, Index
from models.base import Base, JSONList


class JobPosting(Base):
    """
    One Zighang recruitment listing, flattened for storage.

    Design:
    - Primary key is the listing id from the API, so repeated runs upsert
      in place instead of appending
    - Company sub-record flattened into company_* columns
    - Taxonomy arrays stored as JSON lists, never NULL (empty list instead)
    - scraped_at records when this row was last captured

    Field Mapping (API -> column):
    - deadlineType -> deadline_type
    - endDate -> end_date
    - createdAt -> created_at
    - careerMin / careerMax -> career_min / career_max
    - company.id / .name / .image -> company_id / company_name / company_image
    - employeeTypes -> employee_types
    - depthOnes / depthTwos / depthThrees -> depth_ones / depth_twos / depth_threes
    """
    __tablename__ = "scrape_jobs"

    id = Column(String(64), primary_key=True)

    # Listing
    affiliate = Column(String(255), nullable=True)
    title = Column(Text, nullable=True)
    deadline_type = Column(String(50), nullable=True)
    end_date = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime, nullable=True, index=True)

    # Career bounds (years)
    career_min = Column(Integer, nullable=False, default=0)
    career_max = Column(Integer, nullable=False, default=0)

    # Company
    company_id = Column(String(64), nullable=True, index=True)
    company_name = Column(String(255), nullable=True)
    company_image = Column(Text, nullable=True)

    # Taxonomy
    regions = Column(JSONList, nullable=False, default=list)
    employee_types = Column(JSONList, nullable=False, default=list)
    educations = Column(JSONList, nullable=False, default=list)
    depth_ones = Column(JSONList, nullable=False, default=list)
    depth_twos = Column(JSONList, nullable=False, default=list)
    depth_threes = Column(JSONList, nullable=False, default=list)
    keywords = Column(JSONList, nullable=False, default=list)
    tags = Column(JSONList, nullable=False, default=list)
    badges = Column(JSONList, nullable=False, default=list)

    views = Column(Integer, nullable=False, default=0)

    scraped_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_scrape_jobs_views", "views"),
    )
