"""
app/database/enums.py

Enumerations

Defines enumerations used across the platform:
- Account: UserRole, UserStatus, SubscriptionTier, VerificationType
- Ledger: TransactionType, WalletType, TopUpStatus, PaymentMethod, IncomePeriod
- Moderation: ModerationStatus, PhotoStatus
- Back-office: NotificationType, NotificationPriority, SuggestionStatus, SuggestionFieldType
- Profile attributes: ProfileFor, Gender, MaritalStatus, VisaStatus, ReligiousBelonging,
  SocialStatus, Complexion, OccupationType, OriginAudience
"""

from enum import Enum

# ---------------------------------------------------
# Account Enumerations
# ---------------------------------------------------


class UserRole(str, Enum):
    """
    Enum representing user roles for access control.

    Values:
    - USER: Regular member
    - SUPPORT_AGENT
    - CONTENT_EDITOR
    - CONSULTANT
    - SUPERVISOR
    - SUPER_ADMIN
    """

    USER = "USER"
    SUPPORT_AGENT = "SUPPORT_AGENT"
    CONTENT_EDITOR = "CONTENT_EDITOR"
    CONSULTANT = "CONSULTANT"
    SUPERVISOR = "SUPERVISOR"
    SUPER_ADMIN = "SUPER_ADMIN"


class UserStatus(str, Enum):
    """
    Account lifecycle state.

    Values:
    - ACTIVE
    - INACTIVE
    - SUSPENDED
    - BANNED
    """

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    BANNED = "BANNED"


class SubscriptionTier(str, Enum):
    FREE = "FREE"
    STANDARD = "STANDARD"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    PRO = "PRO"


class VerificationType(str, Enum):
    """
    Purpose of an emailed one-time code.

    Values:
    - REGISTRATION
    - PASSWORD_RESET
    - EMAIL_CHANGE
    """

    REGISTRATION = "REGISTRATION"
    PASSWORD_RESET = "PASSWORD_RESET"
    EMAIL_CHANGE = "EMAIL_CHANGE"


# ---------------------------------------------------
# Wallet & Ledger Enumerations
# ---------------------------------------------------


class TransactionType(str, Enum):
    """
    Kind of ledger movement.

    Values:
    - CREDIT, TOP_UP, BONUS, REFUND: money or credits in
    - DEBIT, PURCHASE: credits out
    - REDEMPTION: redeem wallet spend
    """

    CREDIT = "CREDIT"
    DEBIT = "DEBIT"
    TOP_UP = "TOP_UP"
    BONUS = "BONUS"
    REFUND = "REFUND"
    PURCHASE = "PURCHASE"
    REDEMPTION = "REDEMPTION"


class WalletType(str, Enum):
    """
    Values:
    - FUNDING: purchased credits
    - REDEEM: earned credits, capped by a limit
    """

    FUNDING = "FUNDING"
    REDEEM = "REDEEM"


class TopUpStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "BANK_TRANSFER"
    JAZZCASH = "JAZZCASH"
    EASYPAISA = "EASYPAISA"


class IncomePeriod(str, Enum):
    ANNUAL = "ANNUAL"
    MONTHLY = "MONTHLY"


# ---------------------------------------------------
# Moderation Enumerations
# ---------------------------------------------------


class ModerationStatus(str, Enum):
    """
    Review state of a profile.

    Values:
    - PENDING
    - APPROVED
    - REJECTED
    - BANNED
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    BANNED = "BANNED"


class PhotoStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


# ---------------------------------------------------
# Back-office Enumerations
# ---------------------------------------------------


class NotificationType(str, Enum):
    PHONE_VERIFY_REQUEST = "PHONE_VERIFY_REQUEST"
    PHONE_UPDATE = "PHONE_UPDATE"
    NEW_USER = "NEW_USER"
    PROFILE_SUBMITTED = "PROFILE_SUBMITTED"
    TOPUP_REQUEST = "TOPUP_REQUEST"
    SYSTEM = "SYSTEM"


class NotificationPriority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


class SuggestionStatus(str, Enum):
    """
    Review state of a member-submitted lookup value.

    Values:
    - PENDING
    - APPROVED
    - REJECTED
    - DUPLICATE
    - MERGED
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    DUPLICATE = "DUPLICATE"
    MERGED = "MERGED"


class SuggestionFieldType(str, Enum):
    MOTHER_TONGUE = "MOTHER_TONGUE"
    CASTE = "CASTE"
    CITY = "CITY"
    EDUCATION_FIELD = "EDUCATION_FIELD"
    OTHER = "OTHER"


# ---------------------------------------------------
# Profile Attribute Enumerations
# ---------------------------------------------------


class ProfileFor(str, Enum):
    """Who the profile is being created for."""

    SELF = "SELF"
    SON = "SON"
    DAUGHTER = "DAUGHTER"
    BROTHER = "BROTHER"
    SISTER = "SISTER"
    RELATIVE = "RELATIVE"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class MaritalStatus(str, Enum):
    NEVER_MARRIED = "NEVER_MARRIED"
    MARRIED = "MARRIED"
    DIVORCED = "DIVORCED"
    WIDOWED = "WIDOWED"


class VisaStatus(str, Enum):
    CITIZEN = "CITIZEN"
    PERMANENT_RESIDENT = "PERMANENT_RESIDENT"
    WORK_VISA = "WORK_VISA"
    STUDENT_VISA = "STUDENT_VISA"
    VISIT_VISA = "VISIT_VISA"
    OTHER = "OTHER"


class ReligiousBelonging(str, Enum):
    STRICT = "STRICT"
    INCLINED = "INCLINED"
    MODERATE = "MODERATE"
    LIBERAL = "LIBERAL"


class SocialStatus(str, Enum):
    ELITE_CLASS = "ELITE_CLASS"
    ESTABLISHED_MIDDLE = "ESTABLISHED_MIDDLE"
    TECHNICALLY_MIDDLE = "TECHNICALLY_MIDDLE"
    AFFLUENT_WORKING = "AFFLUENT_WORKING"
    TRADITIONAL_WORKING = "TRADITIONAL_WORKING"


class Complexion(str, Enum):
    VERY_FAIR = "VERY_FAIR"
    MEDIUM_FAIR = "MEDIUM_FAIR"
    TAN_WHEATISH = "TAN_WHEATISH"
    DARK = "DARK"


class OccupationType(str, Enum):
    SELF_EMPLOYED = "SELF_EMPLOYED"
    PRIVATE_JOB = "PRIVATE_JOB"
    GOVERNMENT_JOB = "GOVERNMENT_JOB"
    ARMED_FORCES = "ARMED_FORCES"
    NOT_WORKING = "NOT_WORKING"
    STUDENT = "STUDENT"
    RETIRED = "RETIRED"


class OriginAudience(str, Enum):
    """Which origins a member wants to see matches from."""

    SAME_ORIGIN = "SAME_ORIGIN"
    ALL_ORIGINS = "ALL_ORIGINS"
