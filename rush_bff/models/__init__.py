# 모든 모델을 import 하여 Base.metadata에 테이블 등록
from rush_bff.models.user import User, Role, CandidateStage  # noqa: F401
from rush_bff.models.event import Event, EventType  # noqa: F401
from rush_bff.models.attendance import Attendance, AttendanceStatus, RSVPStatus  # noqa: F401
from rush_bff.models.vote import Vote, VoteType, VotingRound, RoundStatus  # noqa: F401
from rush_bff.models.feedback import Feedback  # noqa: F401
from rush_bff.models.dues import DuesPayment, PaymentType, PaymentMethod, PaymentStatus  # noqa: F401
from rush_bff.models.interview import Interview, Recommendation  # noqa: F401
from rush_bff.models.admin_log import AdminActionLog, AdminAction  # noqa: F401
