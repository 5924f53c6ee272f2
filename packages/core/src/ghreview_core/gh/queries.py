"""GraphQL documents issued by ReviewClient, one per operation."""

RESOLVE_PR = """\
query ResolvePR($owner: String!, $name: String!, $number: Int!) {
  repository(owner: $owner, name: $name) {
    pullRequest(number: $number) {
      id
      headRefOid
    }
  }
}"""

VIEWER_LOGIN = "query ViewerLogin { viewer { login } }"

PENDING_REVIEWS = """\
query PendingReviews($owner: String!, $name: String!, $number: Int!, $first: Int!) {
  repository(owner: $owner, name: $name) {
    pullRequest(number: $number) {
      reviews(states: [PENDING], first: $first) {
        nodes {
          id
          state
          url
          updatedAt
          author { login }
          comments(first: 100) {
            totalCount
            nodes {
              id
              path
              line
              startLine
              originalLine
              body
              outdated
            }
          }
        }
      }
    }
  }
}"""

_ALL_COMMENTS_BODY = """\
  repository(owner: $owner, name: $name) {
    pullRequest(number: $number) {
      reviews(%(reviews_args)s) {
        totalCount
        nodes {
          id
          state
          author { login }
          comments(first: 100) {
            nodes {
              id
              path
              line
              startLine
              originalLine
              body
              outdated
              author { login }
            }
          }
        }
      }
      comments(first: $limit) {
        totalCount
        nodes {
          id
          body
          author { login }
          createdAt
        }
      }
    }
  }
}"""

ALL_PR_COMMENTS = (
    "query AllPRComments($owner: String!, $name: String!, $number: Int!, $limit: Int!) {\n"
    + _ALL_COMMENTS_BODY % {"reviews_args": "first: $limit"}
)

ALL_PR_COMMENTS_BY_STATE = (
    "query AllPRComments($owner: String!, $name: String!, $number: Int!, $limit: Int!, "
    "$states: [PullRequestReviewState!]) {\n" + _ALL_COMMENTS_BODY % {"reviews_args": "states: $states, first: $limit"}
)

REVIEW_THREADS = """\
query ReviewThreads($owner: String!, $name: String!, $number: Int!, $limit: Int!) {
  repository(owner: $owner, name: $name) {
    pullRequest(number: $number) {
      reviewThreads(first: $limit) {
        totalCount
        nodes {
          id
          isResolved
          path
          line
          originalLine
          comments(first: 50) {
            nodes {
              id
              body
              author { login }
              pullRequestReview { state }
            }
          }
        }
      }
    }
  }
}"""

CREATE_REVIEW = """\
mutation CreateReview($input: AddPullRequestReviewInput!) {
  addPullRequestReview(input: $input) {
    pullRequestReview { id state }
  }
}"""

ADD_THREAD = """\
mutation AddThread($input: AddPullRequestReviewThreadInput!) {
  addPullRequestReviewThread(input: $input) {
    thread { id path line isOutdated }
  }
}"""

UPDATE_COMMENT = """\
mutation UpdateComment($input: UpdatePullRequestReviewCommentInput!) {
  updatePullRequestReviewComment(input: $input) {
    pullRequestReviewComment { id }
  }
}"""

DELETE_COMMENT = """\
mutation DeleteComment($input: DeletePullRequestReviewCommentInput!) {
  deletePullRequestReviewComment(input: $input) { clientMutationId }
}"""

SUBMIT_REVIEW = """\
mutation SubmitReview($input: SubmitPullRequestReviewInput!) {
  submitPullRequestReview(input: $input) {
    pullRequestReview { id state }
  }
}"""

DELETE_REVIEW = """\
mutation DeleteReview($input: DeletePullRequestReviewInput!) {
  deletePullRequestReview(input: $input) { clientMutationId }
}"""
