from enum import Enum

class ServiceCategory(str, Enum):
    CONSULTING = "consulting"
    EVENTS = "events"
    CREATIVE = "creative"
    TECHNOLOGY = "technology"

class ServiceType(str, Enum):
    # Consulting / PMO
    PMO = "pmo"
    RESTRUCTURING = "restructuring"
    MONITORING = "monitoring"
    TRAINING = "training"
    AUDIT = "audit"
    STRATEGY = "strategy"
    FINANCIAL_CONSULTING = "financial_consulting"
    OTHER = "other"
    # Events
    PHOTOGRAPHY = "photography"
    VIDEO_COVERAGE = "video_coverage"
    STREAMING = "streaming"
    SOUND_LIGHTING = "sound_lighting"
    # Creative
    VIDEO_EDITING = "video_editing"
    GRAPHIC_DESIGN = "graphic_design"
    BRANDING = "branding"
    MARKETING_DIGITAL = "marketing_digital"
    # Technology
    WEB_DEVELOPMENT = "web_development"
    SYSTEMS_DEVELOPMENT = "systems_development"

class Complexity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class DurationUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"

class CoverageDuration(str, Enum):
    HALF_DAY = "half_day"
    FULL_DAY = "full_day"
    MULTI_DAY = "multi_day"

class EventType(str, Enum):
    CORPORATE = "corporate"
    WEDDING = "wedding"
    CONFERENCE = "conference"
    OUTDOOR = "outdoor"
    CONCERT = "concert"
    OTHER = "other"

class ProjectType(str, Enum):
    LANDING_PAGE = "landing_page"
    ECOMMERCE = "ecommerce"
    ERP = "erp"
    MOBILE_APP = "mobile_app"
    WEBAPP = "webapp"
    API = "api"
    OTHER = "other"

class ProposalStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"

class PricingState(str, Enum):
    UNPRICED = "unpriced"
    SNAPSHOTTED = "snapshotted"


# Service type → pricing category
SERVICE_CATEGORIES: dict[ServiceType, ServiceCategory] = {
    ServiceType.PMO: ServiceCategory.CONSULTING,
    ServiceType.RESTRUCTURING: ServiceCategory.CONSULTING,
    ServiceType.MONITORING: ServiceCategory.CONSULTING,
    ServiceType.TRAINING: ServiceCategory.CONSULTING,
    ServiceType.AUDIT: ServiceCategory.CONSULTING,
    ServiceType.STRATEGY: ServiceCategory.CONSULTING,
    ServiceType.FINANCIAL_CONSULTING: ServiceCategory.CONSULTING,
    ServiceType.OTHER: ServiceCategory.CONSULTING,
    ServiceType.PHOTOGRAPHY: ServiceCategory.EVENTS,
    ServiceType.VIDEO_COVERAGE: ServiceCategory.EVENTS,
    ServiceType.STREAMING: ServiceCategory.EVENTS,
    ServiceType.SOUND_LIGHTING: ServiceCategory.EVENTS,
    ServiceType.VIDEO_EDITING: ServiceCategory.CREATIVE,
    ServiceType.GRAPHIC_DESIGN: ServiceCategory.CREATIVE,
    ServiceType.BRANDING: ServiceCategory.CREATIVE,
    ServiceType.MARKETING_DIGITAL: ServiceCategory.CREATIVE,
    ServiceType.WEB_DEVELOPMENT: ServiceCategory.TECHNOLOGY,
    ServiceType.SYSTEMS_DEVELOPMENT: ServiceCategory.TECHNOLOGY,
}
