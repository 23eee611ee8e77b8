from chartdesk.models.org import Org
from chartdesk.models.role_based_access import Role, Permission, RolePermission
from chartdesk.models.org_user import OrgUser
from chartdesk.models.space import Space
from chartdesk.models.dashboard import Dashboard
from chartdesk.models.chart import SavedChart, ChartVersion
from chartdesk.models.analytics import AnalyticsChartView, AnalyticsDashboardView
