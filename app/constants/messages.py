class AuthMessage:
    REQUIRED_FIELDS = "Username and Password are required"
    PASSWORD_TOO_LONG = "Password must be at most 72 bytes"
    SIGNIN_REQUIRED_FIELDS = "Username/Email and Password are required"
    USERNAME_TAKEN = "Username is already taken"
    EMAIL_TAKEN = "Email is already registered"
    REGISTERED = "User registered successfully"
    USER_NOT_FOUND = "User not found"
    INVALID_CREDENTIALS = "Invalid credentials"
    LOGIN_SUCCESS = "Login successful"
    REGISTER_FAILED = "Registration failed"
    SIGNIN_FAILED = "Signin failed"


class MediaMessage:
    USER_ID_REQUIRED = "User ID is required"
    FILE_REQUIRED = "No file uploaded"
    UPLOADED = "Upload successful"
    UPLOAD_FAILED = "Upload failed"
    FETCH_VIDEOS_FAILED = "Error fetching videos"
    FETCH_MEMES_FAILED = "Error fetching memes"
    FETCH_USER_MEDIA_FAILED = "Failed to fetch user media"


class ProfileMessage:
    USER_ID_REQUIRED = "User ID is required"
    UPDATED = "Profile updated successfully"
    UPDATE_FAILED = "Profile update failed"
    NOT_FOUND = "Profile not found"
    FETCH_FAILED = "Error fetching profile"


class SearchMessage:
    USERNAME_REQUIRED = "Username query is required"
    FAILED = "Error searching users"


class ViewMessage:
    IDS_REQUIRED = "videoIds must be a non-null array"
    COMPLETED = "View increments processed"
    FAILED = "Error incrementing views"


class StreakMessage:
    REQUIRED_FIELDS = "profileUserId and watchUserId are required"
    PROFILE_USER_ID_REQUIRED = "profileUserId is required"
    SELF_STREAK = "You cannot add a streak to your own profile"
    ALREADY_ADDED = "Streak already added"
    ADDED = "Streak added successfully"
    CONTENTION = "Streak is being updated concurrently, please retry"
    FAILED = "Error updating streak"
    FETCH_FAILED = "Error fetching streak"


class CommonMessage:
    INVALID_REQUEST = "Invalid request"
