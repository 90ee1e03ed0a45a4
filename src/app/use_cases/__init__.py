"""
Use Cases

Organized into domain folders:
- auth/: Magic links, logout, tenant access checks, dev login
- invites/: Invitation issue, validation and redemption
- tenants/: Tenant resolution, switching, settings, provisioning
- admin/: Tenant suspension and restore
- users/: User context, roles, impersonation targets
- permissions/: Permission reads and overrides
- referrals/: Referral links, visits, signups and trees

Import from subdirectories.
"""
